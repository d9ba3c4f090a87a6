"""Tests for plan document assembly."""

import asyncio
from dataclasses import replace

from meal_planner.domain.documents import DocumentOptions, SectionType
from meal_planner.domain.meals import Language, MealSlot
from meal_planner.domain.plans import MultiDayMealPlan, MultiDayPlanRequest
from meal_planner.services.documents import PlanDocumentAssembler
from meal_planner.services.planner import MultiDayPlanService
from tests.conftest import FakeMealProvider


def _plan(
    planner: MultiDayPlanService, request: MultiDayPlanRequest
) -> MultiDayMealPlan:
    return asyncio.run(planner.generate(request))


def test_sections_are_ordered(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    sections = PlanDocumentAssembler().assemble(_plan(planner, plan_request))

    assert [section.type for section in sections] == [
        SectionType.COVER,
        SectionType.SUMMARY,
        SectionType.DAILY_PLANS,
        SectionType.RECIPES,
        SectionType.SHOPPING_LIST,
        SectionType.NUTRITION_ANALYSIS,
    ]
    assert not sections[0].page_break_before
    assert sections[2].page_break_before


def test_optional_sections_can_be_left_out(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    options = DocumentOptions(
        include_recipes=False,
        include_shopping_list=False,
        include_nutrition_analysis=False,
    )

    sections = PlanDocumentAssembler().assemble(
        _plan(planner, plan_request), options=options
    )

    assert [section.type for section in sections] == [
        SectionType.COVER,
        SectionType.SUMMARY,
        SectionType.DAILY_PLANS,
    ]


def test_cover_uses_patient_label(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    plan = _plan(planner, plan_request)
    assembler = PlanDocumentAssembler()

    labelled = assembler.assemble(plan, patient_label="Ana Ruiz")[0]
    general = assembler.assemble(plan)[0]

    assert labelled.title == "Personalized Meal Plan"
    assert "Patient: Ana Ruiz" in labelled.lines
    assert "Patient: General Plan" in general.lines
    assert "Period: 2026-03-02 - 2026-03-04" in general.lines


def test_recipes_are_deduplicated_by_meal_name(
    planner: MultiDayPlanService,
    meal_provider: FakeMealProvider,
    plan_request: MultiDayPlanRequest,
) -> None:
    meal_provider.meal_name = "Pollo a la Parrilla"
    request = replace(plan_request, number_of_days=2, meal_slots=(MealSlot.LUNCH,))

    sections = PlanDocumentAssembler().assemble(_plan(planner, request))

    recipes = next(s for s in sections if s.type == SectionType.RECIPES)
    assert recipes.lines.count("POLLO A LA PARRILLA") == 1


def test_shopping_list_aggregates_grams_alphabetically(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    request = replace(plan_request, number_of_days=2, meal_slots=(MealSlot.LUNCH,))

    sections = PlanDocumentAssembler().assemble(_plan(planner, request))

    shopping = next(s for s in sections if s.type == SectionType.SHOPPING_LIST)
    assert shopping.lines[:2] == (
        "☐ Broccoli steamed - 200g",
        "☐ Chicken breast grilled - 300g",
    )
    assert shopping.lines[-1] == "Quantities cover the whole plan."


def test_omitted_slot_is_noted_in_daily_plans(
    planner: MultiDayPlanService,
    meal_provider: FakeMealProvider,
    plan_request: MultiDayPlanRequest,
) -> None:
    meal_provider.failing_slots = {MealSlot.DINNER: 2}
    request = replace(plan_request, number_of_days=1)

    sections = PlanDocumentAssembler().assemble(_plan(planner, request))

    daily = next(s for s in sections if s.type == SectionType.DAILY_PLANS)
    assert any(line.startswith("Meal omitted: dinner omitted") for line in daily.lines)
    assert "DINNER: Grilled chicken dinner" not in daily.lines
    assert "LUNCH: Grilled chicken lunch" in daily.lines


def test_nutrition_analysis_reports_distribution_and_grade(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    request = replace(plan_request, number_of_days=1, meal_slots=(MealSlot.LUNCH,))

    sections = PlanDocumentAssembler().assemble(_plan(planner, request))

    analysis = sections[-1]
    assert analysis.type == SectionType.NUTRITION_ANALYSIS
    assert "• Calories: 282 kcal" in analysis.lines or (
        "• Calories: 283 kcal" in analysis.lines
    )
    assert "Accuracy grade: A+" in analysis.lines
    assert "Calorie distribution:" in analysis.lines


def test_spanish_document_is_localized(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    request = replace(plan_request, number_of_days=1, language=Language.SPANISH)

    sections = PlanDocumentAssembler().assemble(_plan(planner, request))

    assert sections[0].title == "Plan de Alimentación Personalizado"
    assert "Paciente: Plan General" in sections[0].lines
    daily = sections[2]
    assert daily.title == "Plan Diario"
    assert "DESAYUNO: Grilled chicken breakfast" in daily.lines
    assert sections[4].title == "Lista de Compras"
