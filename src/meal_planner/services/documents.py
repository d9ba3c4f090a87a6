"""Turn a finished plan into ordered content sections for a renderer."""

from collections import defaultdict
from dataclasses import dataclass

from meal_planner.domain.documents import ContentSection, DocumentOptions, SectionType
from meal_planner.domain.meals import Language, VerifiedMealPlanSuggestion
from meal_planner.domain.plans import DailyMealPlan, MultiDayMealPlan
from meal_planner.localization import slot_name, text
from meal_planner.services.aggregation import accuracy_grade

_BULLET = "• "
_CHECKBOX = "☐ "


@dataclass(frozen=True)
class PlanDocumentAssembler:
    """Pure transform from a plan to document sections.

    Sections are emitted in a fixed order; the optional ones are left out
    according to the given options.
    """

    def assemble(
        self,
        plan: MultiDayMealPlan,
        patient_label: str | None = None,
        options: DocumentOptions | None = None,
    ) -> list[ContentSection]:
        """Return the ordered sections for the plan."""
        options = options or DocumentOptions()
        sections = [
            _cover(plan, patient_label),
            _summary(plan),
            _daily_plans(plan),
        ]
        if options.include_recipes:
            sections.append(_recipes(plan))
        if options.include_shopping_list:
            sections.append(_shopping_list(plan))
        if options.include_nutrition_analysis:
            sections.append(_nutrition_analysis(plan))
        return sections


def _all_meals(plan: MultiDayMealPlan) -> list[VerifiedMealPlanSuggestion]:
    return [meal for day in plan.days for meal in day.meals]


def _cover(plan: MultiDayMealPlan, patient_label: str | None) -> ContentSection:
    lang = plan.language
    patient = patient_label or text(lang, "general_plan")
    return ContentSection(
        type=SectionType.COVER,
        title=text(lang, "cover_title"),
        lines=(
            f"{text(lang, 'patient')}: {patient}",
            f"{text(lang, 'period')}: {plan.start_date.isoformat()} - "
            f"{plan.end_date.isoformat()}",
            f"{text(lang, 'generated_on')}: {plan.generated_at.date().isoformat()}",
            text(lang, "verified_with"),
        ),
    )


def _summary(plan: MultiDayMealPlan) -> ContentSection:
    lang = plan.language
    summary = plan.summary
    return ContentSection(
        type=SectionType.SUMMARY,
        title=text(lang, "plan_summary"),
        lines=(
            f"{_BULLET}{text(lang, 'days')}: {plan.number_of_days}",
            f"{_BULLET}{text(lang, 'total_meals')}: {len(_all_meals(plan))}",
            f"{_BULLET}{text(lang, 'average_daily_calories')}: "
            f"{summary.average_daily_calories:.0f} kcal",
            f"{_BULLET}{text(lang, 'overall_accuracy')}: "
            f"{summary.overall_accuracy * 100:.1f}%",
        ),
    )


def _daily_plans(plan: MultiDayMealPlan) -> ContentSection:
    lang = plan.language
    lines: list[str] = []
    for day in plan.days:
        lines.extend(_day_lines(day, lang))
    return ContentSection(
        type=SectionType.DAILY_PLANS,
        title=text(lang, "daily_plans"),
        lines=tuple(lines),
        page_break_before=True,
    )


def _day_lines(day: DailyMealPlan, lang: Language) -> list[str]:
    lines = [f"{text(lang, 'day')} {day.day_number} - {day.date.isoformat()}"]
    for meal in day.meals:
        suggestion = meal.suggestion
        lines.append(
            f"{slot_name(lang, suggestion.meal_slot).upper()}: {suggestion.meal_name}"
        )
        lines.append(
            f"{text(lang, 'calories')}: {meal.verified_nutrition.calories:.0f} kcal"
        )
        lines.extend(
            f"{_BULLET}{food.suggested.name} - {food.suggested.gram_weight:.0f}g"
            for food in meal.verified_foods
        )
    lines.extend(f"{text(lang, 'omitted_meal')}: {note}" for note in day.notes)
    lines.append(f"{text(lang, 'day_total')}: {day.summary.calories:.0f} kcal")
    lines.append("")
    return lines


def _recipes(plan: MultiDayMealPlan) -> ContentSection:
    lang = plan.language
    lines: list[str] = []
    seen: set[str] = set()
    for meal in _all_meals(plan):
        suggestion = meal.suggestion
        if suggestion.meal_name in seen:
            continue
        seen.add(suggestion.meal_name)
        lines.append(suggestion.meal_name.upper())
        lines.append(f"{text(lang, 'ingredients')}:")
        lines.extend(
            f"{_BULLET}{food.gram_weight:.0f}g {food.name}" for food in suggestion.foods
        )
        lines.append(f"{text(lang, 'preparation')}:")
        lines.append(suggestion.preparation_notes or text(lang, "default_preparation"))
        if suggestion.nutritionist_notes:
            lines.append(
                f"{text(lang, 'nutritionist_notes')}: {suggestion.nutritionist_notes}"
            )
        lines.append("")
    return ContentSection(
        type=SectionType.RECIPES,
        title=text(lang, "recipes"),
        lines=tuple(lines),
        page_break_before=True,
    )


def _shopping_list(plan: MultiDayMealPlan) -> ContentSection:
    lang = plan.language
    totals: dict[str, float] = defaultdict(float)
    for meal in _all_meals(plan):
        for food in meal.verified_foods:
            totals[food.suggested.name] += food.suggested.gram_weight
    lines = [
        f"{_CHECKBOX}{name} - {grams:.0f}g" for name, grams in sorted(totals.items())
    ]
    lines.append(text(lang, "shopping_note"))
    return ContentSection(
        type=SectionType.SHOPPING_LIST,
        title=text(lang, "shopping_list"),
        lines=tuple(lines),
        page_break_before=True,
    )


def _nutrition_analysis(plan: MultiDayMealPlan) -> ContentSection:
    lang = plan.language
    summary = plan.summary
    calories = summary.total_calories
    if calories > 0:
        protein_pct = summary.total_protein_g * 4 / calories * 100
        carbs_pct = summary.total_carbs_g * 4 / calories * 100
        fat_pct = summary.total_fat_g * 9 / calories * 100
    else:
        protein_pct = carbs_pct = fat_pct = 0.0
    lines = (
        f"{text(lang, 'totals')}:",
        f"{_BULLET}{text(lang, 'calories')}: {calories:.0f} kcal",
        f"{_BULLET}{text(lang, 'protein')}: {summary.total_protein_g:.0f}g",
        f"{_BULLET}{text(lang, 'carbohydrates')}: {summary.total_carbs_g:.0f}g",
        f"{_BULLET}{text(lang, 'fat')}: {summary.total_fat_g:.0f}g",
        f"{text(lang, 'daily_average')}:",
        f"{_BULLET}{text(lang, 'calories')}: {summary.average_daily_calories:.0f} kcal",
        f"{_BULLET}{text(lang, 'protein')}: {summary.average_daily_protein_g:.0f}g",
        f"{_BULLET}{text(lang, 'carbohydrates')}: "
        f"{summary.average_daily_carbs_g:.0f}g",
        f"{_BULLET}{text(lang, 'fat')}: {summary.average_daily_fat_g:.0f}g",
        f"{text(lang, 'calorie_distribution')}:",
        f"{_BULLET}{text(lang, 'protein')}: {protein_pct:.0f}%",
        f"{_BULLET}{text(lang, 'carbohydrates')}: {carbs_pct:.0f}%",
        f"{_BULLET}{text(lang, 'fat')}: {fat_pct:.0f}%",
        f"{text(lang, 'accuracy_grade')}: {accuracy_grade(summary.overall_accuracy)}",
    )
    return ContentSection(
        type=SectionType.NUTRITION_ANALYSIS,
        title=text(lang, "nutrition_analysis"),
        lines=lines,
        page_break_before=True,
    )
