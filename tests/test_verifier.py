"""Tests for confidence-banded food verification."""

import pytest

from meal_planner.domain.meals import Language, VerifiedFood
from meal_planner.domain.nutrition import NutritionValues, ReferenceFood
from meal_planner.domain.selection import PendingSelection, SelectionDecision
from meal_planner.services.normalizer import translation_info
from meal_planner.services.verifier import FoodVerifier
from tests.conftest import BROCCOLI, CHICKEN, WHITE_RICE, suggested_food


def _reference(description: str) -> ReferenceFood:
    return ReferenceFood(
        fdc_id=1,
        description=description,
        per_100g=NutritionValues(calories=100, protein_g=1, carbs_g=1, fat_g=1),
    )


def test_exact_match_is_auto_accepted() -> None:
    food = suggested_food("Chicken breast grilled", 200)

    result = FoodVerifier().verify(food, [BROCCOLI, CHICKEN])

    assert isinstance(result, VerifiedFood)
    assert result.is_verified
    assert result.matched == CHICKEN
    assert result.confidence == 1.0
    assert result.verified_nutrition.calories == pytest.approx(330)
    assert result.verified_nutrition.protein_g == pytest.approx(62)


def test_unrelated_candidates_are_auto_rejected() -> None:
    food = suggested_food("Black beans", 100)

    result = FoodVerifier().verify(food, [WHITE_RICE])

    assert isinstance(result, VerifiedFood)
    assert not result.is_verified
    assert result.matched is None
    assert result.confidence == 0.0
    assert result.verified_nutrition == food.estimated_nutrition


def test_no_candidates_uses_estimate() -> None:
    food = suggested_food("Black beans", 100)

    result = FoodVerifier().verify(food, [])

    assert isinstance(result, VerifiedFood)
    assert not result.is_verified
    assert result.confidence == 0.0
    assert "No reference candidates" in result.notes


def test_ambiguous_match_escalates() -> None:
    food = suggested_food("Rice cooked", 150)

    result = FoodVerifier().verify(food, [WHITE_RICE])

    assert isinstance(result, PendingSelection)
    assert result.candidates == (WHITE_RICE,)
    assert result.confidences[0] == pytest.approx(2 / 3)


def test_threshold_boundaries() -> None:
    verifier = FoodVerifier()
    accepted = verifier.verify(
        suggested_food("a b c d", 100), [_reference("a b c d e")]
    )
    escalated = verifier.verify(
        suggested_food("a b c", 100), [_reference("a b c d e f g h i j")]
    )

    assert isinstance(accepted, VerifiedFood)
    assert accepted.is_verified
    assert accepted.confidence == 0.8
    assert isinstance(escalated, PendingSelection)


def test_custom_thresholds() -> None:
    verifier = FoodVerifier(auto_accept_threshold=0.6, auto_reject_floor=0.1)

    result = verifier.verify(suggested_food("Rice cooked", 150), [WHITE_RICE])

    assert isinstance(result, VerifiedFood)
    assert result.is_verified


def test_verification_is_deterministic() -> None:
    verifier = FoodVerifier()
    food = suggested_food("Rice cooked", 150)
    candidates = [CHICKEN, WHITE_RICE, BROCCOLI]

    first = verifier.verify(food, candidates)
    second = verifier.verify(food, candidates)

    assert isinstance(first, PendingSelection)
    assert isinstance(second, PendingSelection)
    assert first.candidates == second.candidates
    assert first.confidences == second.confidences


def test_translated_name_is_used_for_matching() -> None:
    food = suggested_food("Pechuga de pollo a la parrilla", 150)
    translation = translation_info(food.name, Language.SPANISH)

    result = FoodVerifier().verify(food, [CHICKEN], translation)

    assert isinstance(result, VerifiedFood)
    assert result.is_verified
    assert result.suggested.name == "Pechuga de pollo a la parrilla"


def test_accepted_decision_is_verified() -> None:
    verifier = FoodVerifier()
    selection = verifier.verify(suggested_food("Rice cooked", 200), [WHITE_RICE])
    assert isinstance(selection, PendingSelection)

    result = verifier.apply_decision(
        selection, SelectionDecision(token=selection.token, choice=WHITE_RICE)
    )

    assert result.is_verified
    assert result.confidence == 1.0
    assert result.matched == WHITE_RICE
    assert result.verified_nutrition.calories == pytest.approx(260)
    assert "Selected by reviewer" in result.notes


def test_no_match_decision_uses_estimate() -> None:
    verifier = FoodVerifier()
    selection = verifier.verify(suggested_food("Rice cooked", 200), [WHITE_RICE])
    assert isinstance(selection, PendingSelection)

    result = verifier.apply_decision(
        selection, SelectionDecision(token=selection.token, choice=None)
    )

    assert not result.is_verified
    assert result.confidence == 0.0
    assert result.verified_nutrition == selection.food.estimated_nutrition


def test_skipped_decision_keeps_top_score() -> None:
    verifier = FoodVerifier()
    selection = verifier.verify(suggested_food("Rice cooked", 200), [WHITE_RICE])
    assert isinstance(selection, PendingSelection)

    result = verifier.apply_decision(
        selection,
        SelectionDecision(token=selection.token, choice=None, skipped=True),
    )

    assert not result.is_verified
    assert result.confidence == pytest.approx(2 / 3)
    assert "skipped" in result.notes
