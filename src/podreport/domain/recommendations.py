"""Rule-based optimization recommendations."""

from __future__ import annotations

from dataclasses import dataclass

LOW_EFFICIENCY_THRESHOLD = 50.0
HIGH_EFFICIENCY_THRESHOLD = 80.0
MIN_BALANCE_SCORE = 70.0


@dataclass(frozen=True)
class RecommendationMessages:
    """Text emitted for each recommendation rule."""

    reduce_cpu_limits: str = (
        "Consider reducing CPU limits - cluster is over-provisioned"
    )
    reduce_memory_limits: str = (
        "Consider reducing Memory limits - cluster is over-provisioned"
    )
    cpu_throttling_risk: str = "CPU limits too tight - risk of throttling"
    memory_oom_risk: str = "Memory limits too tight - risk of OOM kills"
    prioritize_right_sizing: str = (
        "Focus on right-sizing over-provisioned namespaces first"
    )
    spread_pods: str = (
        "Consider pod anti-affinity rules for better node distribution"
    )
    well_balanced: str = "Cluster resource allocation looks well-balanced!"


DEFAULT_MESSAGES = RecommendationMessages()


def _below(value: float | None, threshold: float) -> bool:
    return value is not None and value < threshold


def _above(value: float | None, threshold: float) -> bool:
    return value is not None and value > threshold


def generate_recommendations(
    cpu_efficiency: float | None,
    memory_efficiency: float | None,
    over_provisioned: int,
    under_provisioned: int,
    balance_score: float,
    *,
    messages: RecommendationMessages = DEFAULT_MESSAGES,
) -> list[str]:
    """Return every matching recommendation in rule order.

    Rules are independent threshold checks. Missing efficiencies (no limits in
    the cluster) never trigger a rule. When nothing matches a single
    well-balanced message is returned.
    """
    rules = (
        (_below(cpu_efficiency, LOW_EFFICIENCY_THRESHOLD), messages.reduce_cpu_limits),
        (
            _below(memory_efficiency, LOW_EFFICIENCY_THRESHOLD),
            messages.reduce_memory_limits,
        ),
        (
            _above(cpu_efficiency, HIGH_EFFICIENCY_THRESHOLD),
            messages.cpu_throttling_risk,
        ),
        (
            _above(memory_efficiency, HIGH_EFFICIENCY_THRESHOLD),
            messages.memory_oom_risk,
        ),
        (over_provisioned > under_provisioned, messages.prioritize_right_sizing),
        (balance_score < MIN_BALANCE_SCORE, messages.spread_pods),
    )
    recommendations = [message for matched, message in rules if matched]
    return recommendations or [messages.well_balanced]
