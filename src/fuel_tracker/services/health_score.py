"""Daily health score heuristic."""

from dataclasses import dataclass

from fuel_tracker.domain.nutrition import DaySummary


@dataclass(frozen=True)
class HealthScoreRubric:
    """Weights and thresholds for the daily health score.

    ``calorie_bands`` is checked in order; the first band whose inclusive
    ratio range contains the calorie ratio awards its points.
    """

    calorie_bands: tuple[tuple[float, float, int], ...] = (
        (0.85, 1.1, 40),
        (0.7, 1.2, 30),
        (0.5, 1.3, 15),
    )
    protein_points: float = 25.0
    balance_points: float = 20.0
    meal_points: tuple[tuple[int, int], ...] = ((3, 15), (2, 10), (1, 5))
    max_score: int = 100


DEFAULT_RUBRIC = HealthScoreRubric()

_LABELS = (
    (90, "Excellent"),
    (75, "Great"),
    (60, "Good"),
    (40, "Fair"),
)


def health_score(day: DaySummary, rubric: HealthScoreRubric = DEFAULT_RUBRIC) -> int:
    """Return a 0-100 score for how well a day matched its targets."""
    consumed = day.consumed
    targets = day.targets
    score = 0.0

    calorie_ratio = consumed.calories / max(1, targets.calorie_goal)
    for lower, upper, points in rubric.calorie_bands:
        if lower <= calorie_ratio <= upper:
            score += points
            break

    protein_ratio = consumed.protein_g / max(1.0, targets.protein_g)
    score += min(rubric.protein_points, protein_ratio * rubric.protein_points)

    carbs_ratio = consumed.carbs_g / max(1.0, targets.carbs_g)
    fat_ratio = consumed.fat_g / max(1.0, targets.fat_g)
    score += ((min(1.0, carbs_ratio) + min(1.0, fat_ratio)) / 2) * rubric.balance_points

    for minimum, points in rubric.meal_points:
        if day.meals_logged >= minimum:
            score += points
            break

    return max(0, min(rubric.max_score, int(score)))


def health_score_label(score: int) -> str:
    """Return a display label for a health score."""
    for threshold, label in _LABELS:
        if score >= threshold:
            return label
    return "Needs Work"
