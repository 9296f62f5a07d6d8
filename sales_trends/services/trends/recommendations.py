from enum import Enum
from sales_trends.schemas.trends import Thresholds
from sales_trends.services.trends.trends_utils import round_half_up


class RecommendedAction(str, Enum):
    RAMP_UP = "ramp-up"
    SCALE_DOWN = "scale-down"
    NO_ACTION = "no action"


def effective_baseline(mean: float) -> float:
    # A zero mean would make every change undefined
    return mean or 1.0


def classify_change(change: float, thresholds: Thresholds) -> RecommendedAction:
    """Both thresholds are inclusive."""
    if change >= thresholds.increase:
        return RecommendedAction.RAMP_UP
    if change <= thresholds.decrease:
        return RecommendedAction.SCALE_DOWN
    return RecommendedAction.NO_ACTION


def recommend(pred: float, baseline: float, thresholds: Thresholds) -> str:
    """
    Message for one forecast day, e.g.
    ``predicted increase 25% - recommend ramp-up (reorder)``.
    """
    baseline = effective_baseline(baseline)
    change = (pred - baseline) / baseline
    action = classify_change(change, thresholds)
    pct = round_half_up(change * 100)
    if action == RecommendedAction.RAMP_UP:
        return f"predicted increase {pct}% - recommend ramp-up (reorder)"
    if action == RecommendedAction.SCALE_DOWN:
        return f"predicted decrease {pct}% - recommend scale-down"
    return RecommendedAction.NO_ACTION.value
