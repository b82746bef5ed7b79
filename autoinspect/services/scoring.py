"""Pure score aggregation for an inspection run.

Everything here works on plain ``(zone, score)`` samples so it can be tested
without the provider or the database.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from autoinspect.models.enums import PhotoZone, ScoreCategory, score_category_for

EXTERIOR_DEFAULT = 10
INTERIOR_DEFAULT = 10
TIRES_DEFAULT = 8

# Category weights in percent; they sum to 100 so a perfect 10/10/10/10
# becomes 100.
WEIGHTS: dict[ScoreCategory, int] = {
    ScoreCategory.EXTERIOR: 35,
    ScoreCategory.INTERIOR: 30,
    ScoreCategory.MECHANICAL: 20,
    ScoreCategory.TIRES: 15,
}


@dataclass(frozen=True)
class CategoryScores:
    exterior: int
    interior: int
    mechanical: int
    tires: int

    @property
    def overall(self) -> int:
        return overall_score(self.exterior, self.interior, self.mechanical, self.tires)


def truncating_mean(scores: list[int], default: int) -> int:
    if not scores:
        return default
    return sum(scores) // len(scores)


def mechanical_base_score(year: int, mileage_km: int, current_year: int | None = None) -> int:
    """Expected mechanical condition from age and mileage alone.

    Used as the mechanical score when no engine photo was analysed.
    """
    if current_year is None:
        current_year = date.today().year
    age = current_year - year

    score = 10
    if age > 5:
        score -= 2
    elif age > 2:
        score -= 1

    if mileage_km > 100_000:
        score -= 3
    elif mileage_km > 50_000:
        score -= 2
    elif mileage_km > 20_000:
        score -= 1

    return max(score, 1)


def overall_score(exterior: int, interior: int, mechanical: int, tires: int) -> int:
    """Weighted 0-100 composite of the 0-10 category scores.

    Summed in tenths so halves round up exactly instead of going through
    float arithmetic and banker's rounding.
    """
    tenths = (
        exterior * WEIGHTS[ScoreCategory.EXTERIOR]
        + interior * WEIGHTS[ScoreCategory.INTERIOR]
        + mechanical * WEIGHTS[ScoreCategory.MECHANICAL]
        + tires * WEIGHTS[ScoreCategory.TIRES]
    )
    return min((tenths + 5) // 10, 100)


def aggregate_scores(
    samples: Iterable[tuple[PhotoZone, int]],
    mechanical_default: int,
) -> CategoryScores:
    buckets: dict[ScoreCategory, list[int]] = {category: [] for category in ScoreCategory}
    for zone, score in samples:
        category = score_category_for(zone)
        if category is not None:
            buckets[category].append(score)

    return CategoryScores(
        exterior=truncating_mean(buckets[ScoreCategory.EXTERIOR], EXTERIOR_DEFAULT),
        interior=truncating_mean(buckets[ScoreCategory.INTERIOR], INTERIOR_DEFAULT),
        mechanical=truncating_mean(buckets[ScoreCategory.MECHANICAL], mechanical_default),
        tires=truncating_mean(buckets[ScoreCategory.TIRES], TIRES_DEFAULT),
    )
