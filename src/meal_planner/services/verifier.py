"""Confidence-banded reconciliation of suggested foods."""

from dataclasses import dataclass

from meal_planner.domain.meals import SuggestedFood, VerifiedFood
from meal_planner.domain.nutrition import ReferenceFood
from meal_planner.domain.selection import (
    PendingSelection,
    SelectionDecision,
    TranslationInfo,
)
from meal_planner.services.similarity import rank_candidates, similarity

AUTO_ACCEPT_THRESHOLD = 0.80
AUTO_REJECT_FLOOR = 0.30


@dataclass(frozen=True)
class FoodVerifier:
    """Decides whether a reference match can be trusted without a human.

    The verifier never performs lookups itself: callers pass the candidate
    records, so the same inputs always give the same outcome.
    """

    auto_accept_threshold: float = AUTO_ACCEPT_THRESHOLD
    auto_reject_floor: float = AUTO_REJECT_FLOOR

    def verify(
        self,
        suggested: SuggestedFood,
        candidates: list[ReferenceFood],
        translation: TranslationInfo | None = None,
    ) -> VerifiedFood | PendingSelection:
        """Return a verified food, or a pending selection when ambiguous."""
        name = translation.translated_name if translation else suggested.name
        ranked = rank_candidates(suggested, candidates, name=name)
        if not ranked:
            return estimated_food(
                suggested, 0.0, "No reference candidates found; using AI estimate"
            )

        best, best_score = ranked[0]
        if best_score >= self.auto_accept_threshold:
            return matched_food(
                suggested,
                best,
                best_score,
                f"Matched {best.description} (confidence {best_score:.2f})",
            )
        if best_score < self.auto_reject_floor:
            return estimated_food(
                suggested,
                best_score,
                f"Best reference match {best.description} scored "
                f"{best_score:.2f}; using AI estimate",
            )
        return PendingSelection(
            food=suggested,
            candidates=tuple(candidate for candidate, _ in ranked),
            confidences=tuple(score for _, score in ranked),
            translation=translation,
        )

    def apply_decision(
        self, selection: PendingSelection, decision: SelectionDecision
    ) -> VerifiedFood:
        """Build the final verified food for a resolved selection."""
        if decision.skipped:
            top = selection.confidences[0] if selection.confidences else 0.0
            return estimated_food(
                selection.food, top, "Selection skipped; using AI estimate"
            )
        if decision.choice is None:
            return estimated_food(
                selection.food,
                0.0,
                "Reviewer found no matching reference food; using AI estimate",
            )
        name = (
            selection.translation.translated_name
            if selection.translation
            else selection.food.name
        )
        score = similarity(name, decision.choice.description)
        return matched_food(
            selection.food,
            decision.choice,
            1.0,
            f"Selected by reviewer: {decision.choice.description} "
            f"(name similarity {score:.2f})",
        )


def matched_food(
    suggested: SuggestedFood,
    reference: ReferenceFood,
    confidence: float,
    notes: str,
) -> VerifiedFood:
    """Scale a reference record to the suggested portion."""
    return VerifiedFood(
        suggested=suggested,
        matched=reference,
        verified_nutrition=reference.per_100g.scaled(suggested.gram_weight / 100.0),
        confidence=confidence,
        is_verified=True,
        notes=notes,
    )


def estimated_food(
    suggested: SuggestedFood, confidence: float, notes: str
) -> VerifiedFood:
    """Fall back to the LLM's own nutrition estimate."""
    return VerifiedFood(
        suggested=suggested,
        matched=None,
        verified_nutrition=suggested.estimated_nutrition,
        confidence=confidence,
        is_verified=False,
        notes=notes,
    )
