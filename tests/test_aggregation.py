"""Tests for nutrition roll-ups and accuracy."""

from datetime import date

import pytest

from meal_planner.domain.meals import (
    MacroAccuracy,
    MealPlanSuggestion,
    MealSlot,
    VerifiedFood,
    VerifiedMealPlanSuggestion,
)
from meal_planner.domain.nutrition import NutritionValues
from meal_planner.domain.plans import DailyMealPlan
from meal_planner.services.aggregation import (
    accuracy_grade,
    macro_accuracy,
    macros_out_of_tolerance,
    meal_accuracy,
    meal_nutrition,
    sum_nutrition,
    summarize_day,
    summarize_plan,
)
from meal_planner.services.verifier import estimated_food, matched_food
from tests.conftest import CHICKEN, suggested_food


def _foods() -> list[VerifiedFood]:
    return [
        matched_food(suggested_food("Chicken breast grilled", 150), CHICKEN, 1.0, ""),
        estimated_food(suggested_food("Black beans", 80), 0.2, ""),
        estimated_food(suggested_food("Salsa", 30), 0.0, ""),
        matched_food(suggested_food("Chicken breast", 60), CHICKEN, 0.9, ""),
    ]


def _meal(calories: float, accuracy: float) -> VerifiedMealPlanSuggestion:
    nutrition = NutritionValues(
        calories=calories, protein_g=calories / 10, carbs_g=calories / 8, fat_g=10
    )
    return VerifiedMealPlanSuggestion(
        suggestion=MealPlanSuggestion(
            meal_name="Meal",
            meal_slot=MealSlot.LUNCH,
            foods=(),
            total_nutrition=nutrition,
        ),
        verified_foods=(),
        verified_nutrition=nutrition,
        overall_accuracy=accuracy,
        macro_accuracy=MacroAccuracy(1.0, 1.0, 1.0, 1.0),
    )


def test_totals_are_additive() -> None:
    foods = _foods()

    whole = meal_nutrition(foods)
    split = meal_nutrition(foods[:2]) + meal_nutrition(foods[2:])

    assert whole.calories == pytest.approx(split.calories, abs=1e-6)
    assert whole.protein_g == pytest.approx(split.protein_g, abs=1e-6)
    assert whole.carbs_g == pytest.approx(split.carbs_g, abs=1e-6)
    assert whole.fat_g == pytest.approx(split.fat_g, abs=1e-6)


def test_sum_of_nothing_is_zero() -> None:
    assert sum_nutrition([]) == NutritionValues.zero()


def test_meal_accuracy_is_mean_confidence() -> None:
    assert meal_accuracy(_foods()) == pytest.approx((1.0 + 0.2 + 0.0 + 0.9) / 4)
    assert meal_accuracy([]) == 0.0


def test_macro_accuracy_is_clamped() -> None:
    verified = NutritionValues(calories=450, protein_g=90, carbs_g=50, fat_g=0)
    target = NutritionValues(calories=500, protein_g=30, carbs_g=50, fat_g=0)

    result = macro_accuracy(verified, target)

    assert result.calories == pytest.approx(0.9)
    assert result.protein == 0.0
    assert result.carbs == 1.0
    assert result.fat == 0.0
    assert result.overall == pytest.approx(0.475)


def test_macros_out_of_tolerance() -> None:
    accuracy = MacroAccuracy(calories=0.85, protein=0.75, carbs=0.95, fat=0.5)

    assert macros_out_of_tolerance(accuracy) == ["protein", "fat"]
    assert macros_out_of_tolerance(accuracy, threshold=0.6) == []


def test_summarize_day_and_plan() -> None:
    day_one = DailyMealPlan(
        day_number=1,
        date=date(2026, 3, 2),
        meals=(_meal(500, 1.0), _meal(700, 0.5)),
        summary=summarize_day([_meal(500, 1.0), _meal(700, 0.5)]),
    )
    day_two = DailyMealPlan(
        day_number=2,
        date=date(2026, 3, 3),
        meals=(_meal(800, 0.5),),
        summary=summarize_day([_meal(800, 0.5)]),
    )

    assert day_one.summary.calories == pytest.approx(1200)
    assert day_one.summary.average_accuracy == pytest.approx(0.75)

    plan = summarize_plan([day_one, day_two])

    assert plan.total_calories == pytest.approx(2000)
    assert plan.average_daily_calories == pytest.approx(1000)
    assert plan.total_fat_g == pytest.approx(30)
    assert plan.overall_accuracy == pytest.approx(0.625)


def test_summaries_of_nothing_are_zero() -> None:
    assert summarize_day([]).calories == 0.0
    assert summarize_day([]).average_accuracy == 0.0
    assert summarize_plan([]).average_daily_calories == 0.0


@pytest.mark.parametrize(
    ("accuracy", "grade"),
    [
        (0.97, "A+"),
        (0.95, "A+"),
        (0.91, "A"),
        (0.86, "B+"),
        (0.8, "B"),
        (0.76, "C+"),
        (0.2, "C"),
    ],
)
def test_accuracy_grade(accuracy: float, grade: str) -> None:
    assert accuracy_grade(accuracy) == grade
