"""Word-overlap similarity between suggested names and reference records."""

from meal_planner.domain.meals import SuggestedFood
from meal_planner.domain.nutrition import ReferenceFood


def similarity(suggested_name: str, reference_description: str) -> float:
    """Return the Jaccard similarity of the lower-cased word sets."""
    words_a = set(suggested_name.lower().split())
    words_b = set(reference_description.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def rank_candidates(
    suggested: SuggestedFood,
    candidates: list[ReferenceFood],
    name: str | None = None,
) -> list[tuple[ReferenceFood, float]]:
    """Score candidates and order them by descending confidence.

    Equal scores prefer the record whose serving size is closest to the
    suggested gram weight; records without a serving size sort after those
    with one, and remaining ties keep provider order.
    """
    query = name if name is not None else suggested.name
    scored = [
        (index, candidate, similarity(query, candidate.description))
        for index, candidate in enumerate(candidates)
    ]
    scored.sort(
        key=lambda entry: (
            -entry[2],
            _serving_distance(suggested.gram_weight, entry[1]),
            entry[0],
        )
    )
    return [(candidate, score) for _, candidate, score in scored]


def _serving_distance(gram_weight: float, candidate: ReferenceFood) -> float:
    if candidate.serving_size_g is None:
        return float("inf")
    return abs(candidate.serving_size_g - gram_weight)
