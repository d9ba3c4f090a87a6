"""Multi-day plan generation with verification and variety guidance."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from meal_planner.domain.errors import (
    GenerationAbortedError,
    GenerationError,
    ProviderUnavailableError,
)
from meal_planner.domain.meals import (
    Language,
    MealPlanRequest,
    MealPlanSuggestion,
    MealSlot,
    SuggestedFood,
    VerifiedFood,
    VerifiedMealPlanSuggestion,
)
from meal_planner.domain.nutrition import ReferenceFood
from meal_planner.domain.plans import (
    DailyMealPlan,
    MultiDayMealPlan,
    MultiDayPlanRequest,
)
from meal_planner.domain.selection import PendingSelection
from meal_planner.services.aggregation import (
    NUTRITION_DEVIATION_THRESHOLD,
    macro_accuracy,
    macros_out_of_tolerance,
    meal_accuracy,
    meal_nutrition,
    summarize_day,
    summarize_plan,
)
from meal_planner.services.meal_suggestions import MealSuggestionProvider
from meal_planner.services.normalizer import (
    base_ingredient,
    normalize,
    translation_info,
)
from meal_planner.services.nutrition import ReferenceFoodLookup
from meal_planner.services.sessions import PlanGenerationSession
from meal_planner.services.verifier import FoodVerifier

_logger = logging.getLogger(__name__)

DEFAULT_SLOT_SHARES: dict[MealSlot, float] = {
    MealSlot.BREAKFAST: 0.25,
    MealSlot.LUNCH: 0.35,
    MealSlot.DINNER: 0.35,
    MealSlot.SNACK: 0.05,
}

DAY_PHASE_EMPHASIS = (
    "Focus on lean proteins and fresh vegetables.",
    "Include healthy grains and legumes.",
    "Emphasize omega-3 rich foods and colorful produce.",
)

RECENT_INGREDIENT_LIMIT = 8


def slot_calorie_shares(
    slots: Sequence[MealSlot],
    shares: Mapping[MealSlot, float] = DEFAULT_SLOT_SHARES,
) -> list[float]:
    """Calorie share per slot; slots without a constant split the remainder."""
    known = [shares.get(slot) for slot in slots]
    undefined = sum(1 for share in known if share is None)
    if not undefined:
        return [float(share) for share in known]
    remainder = max(1.0 - sum(share for share in known if share is not None), 0.0)
    even = remainder / undefined
    return [float(share) if share is not None else even for share in known]


def variety_instructions(
    day_index: int,
    cuisines: Sequence[str],
    recent_ingredients: Sequence[str],
) -> tuple[str, str | None]:
    """Build the variety hint and the cuisine for a day."""
    parts: list[str] = []
    cuisine: str | None = None
    if cuisines:
        cuisine = cuisines[day_index % len(cuisines)]
        parts.append(f"Focus on {cuisine} cuisine.")
    if recent_ingredients:
        parts.append(
            "For variety, avoid these recently used ingredients: "
            f"{', '.join(recent_ingredients)}."
        )
    parts.append(DAY_PHASE_EMPHASIS[day_index % len(DAY_PHASE_EMPHASIS)])
    return " ".join(parts), cuisine


def recent_ingredients(
    meals: Sequence[VerifiedMealPlanSuggestion],
    limit: int = RECENT_INGREDIENT_LIMIT,
) -> list[str]:
    """Distinct base ingredients of the given meals, most recent first."""
    ordered: list[str] = []
    for meal in reversed(meals):
        for food in reversed(meal.verified_foods):
            ingredient = base_ingredient(food.suggested.name)
            if ingredient and ingredient not in ordered:
                ordered.append(ingredient)
                if len(ordered) == limit:
                    return ordered
    return ordered


@dataclass
class MultiDayPlanService:
    """Generates, verifies, and aggregates meals day by day.

    Slots are generated one after another because each request carries the
    ingredients used by the slots before it.
    """

    meal_provider: MealSuggestionProvider
    reference_lookup: ReferenceFoodLookup
    verifier: FoodVerifier = field(default_factory=FoodVerifier)
    slot_shares: Mapping[MealSlot, float] = field(
        default_factory=lambda: dict(DEFAULT_SLOT_SHARES)
    )
    retry_attempts: int = 1
    nutrition_deviation_threshold: float = NUTRITION_DEVIATION_THRESHOLD

    async def generate(
        self,
        request: MultiDayPlanRequest,
        session: PlanGenerationSession | None = None,
    ) -> MultiDayMealPlan:
        """Generate a full plan; raises GenerationAbortedError on cancel."""
        request.validate()
        active = session or PlanGenerationSession()
        active.progress.start(request.total_meals)
        _logger.info(
            "Generating plan: session=%s days=%s slots=%s",
            active.id,
            request.number_of_days,
            ",".join(slot.value for slot in request.meal_slots),
        )

        days: list[DailyMealPlan] = []
        previous_meals: list[VerifiedMealPlanSuggestion] = []
        try:
            for day_index in range(request.number_of_days):
                day = await self._generate_day(
                    day_index, request, previous_meals, active
                )
                days.append(day)
                previous_meals.extend(day.meals)
        except GenerationAbortedError:
            active.queue.clear()
            _logger.info("Plan generation aborted: session=%s", active.id)
            raise

        active.raise_if_cancelled()
        if not previous_meals:
            raise GenerationError("No meal slot could be generated for the plan")

        return MultiDayMealPlan(
            id=uuid4(),
            patient_id=request.patient_id,
            start_date=request.start_date,
            number_of_days=request.number_of_days,
            days=tuple(days),
            summary=summarize_plan(days),
            language=request.language,
            generated_at=datetime.now(tz=UTC),
            meal_slots=request.meal_slots,
        )

    async def _generate_day(
        self,
        day_index: int,
        request: MultiDayPlanRequest,
        previous_meals: list[VerifiedMealPlanSuggestion],
        session: PlanGenerationSession,
    ) -> DailyMealPlan:
        _logger.info("Generating day %s of %s", day_index + 1, request.number_of_days)
        shares = slot_calorie_shares(request.meal_slots, self.slot_shares)
        meals: list[VerifiedMealPlanSuggestion] = []
        notes: list[str] = []
        for slot, share in zip(request.meal_slots, shares, strict=True):
            session.raise_if_cancelled()
            _logger.debug("Generating %s for day %s", slot.value, day_index + 1)
            meal_request = self._meal_request(
                request, slot, share, day_index, [*previous_meals, *meals]
            )
            suggestion, error = await self._suggest_with_retry(meal_request, session)
            if suggestion is None:
                _logger.warning(
                    "Omitting %s on day %s: %s", slot.value, day_index + 1, error
                )
                notes.append(f"{slot.value} omitted: {error}")
                session.progress.advance(failed=True)
                continue
            meal = await self._verify_meal(suggestion, meal_request, session)
            meals.append(meal)
            session.progress.advance()

        return DailyMealPlan(
            day_number=day_index + 1,
            date=request.start_date + timedelta(days=day_index),
            meals=tuple(meals),
            summary=summarize_day(meals),
            notes=tuple(notes),
        )

    def _meal_request(
        self,
        request: MultiDayPlanRequest,
        slot: MealSlot,
        share: float,
        day_index: int,
        used_meals: list[VerifiedMealPlanSuggestion],
    ) -> MealPlanRequest:
        instructions, cuisine = variety_instructions(
            day_index, request.cuisine_rotation, recent_ingredients(used_meals)
        )
        return MealPlanRequest(
            target_calories=request.daily_calories * share,
            target_protein_g=request.daily_protein_g * share,
            target_carbs_g=request.daily_carbs_g * share,
            target_fat_g=request.daily_fat_g * share,
            meal_slot=slot,
            cuisine_preference=cuisine,
            dietary_restrictions=request.dietary_restrictions,
            medical_conditions=request.medical_conditions,
            patient_id=request.patient_id,
            variety_instructions=instructions,
            language=request.language,
        )

    async def _suggest_with_retry(
        self, request: MealPlanRequest, session: PlanGenerationSession
    ) -> tuple[MealPlanSuggestion | None, str | None]:
        error: str | None = None
        for attempt in range(1, self.retry_attempts + 2):
            session.raise_if_cancelled()
            try:
                suggestion = await self.meal_provider.generate_meal(request)
            except GenerationAbortedError:
                raise
            except Exception as exc:
                error = str(exc) or type(exc).__name__
                _logger.warning(
                    "Meal generation failed for %s (attempt %s/%s): %s",
                    request.meal_slot.value,
                    attempt,
                    self.retry_attempts + 1,
                    error,
                )
                continue
            session.raise_if_cancelled()
            return suggestion, None
        return None, error

    async def _verify_meal(
        self,
        suggestion: MealPlanSuggestion,
        request: MealPlanRequest,
        session: PlanGenerationSession,
    ) -> VerifiedMealPlanSuggestion:
        foods: list[VerifiedFood] = []
        for food in suggestion.foods:
            foods.append(await self._verify_food(food, request.language, session))
        total = meal_nutrition(foods)
        accuracy = macro_accuracy(total, request.targets)
        overall = meal_accuracy(foods)
        notes = [
            f"{sum(1 for food in foods if food.is_verified)}/{len(foods)} foods "
            "verified with USDA FoodData Central",
            f"Overall accuracy: {overall * 100:.1f}%",
        ]
        notes.extend(
            f"Could not verify: {food.suggested.name}"
            for food in foods
            if not food.is_verified
        )
        notes.extend(
            f"{macro} deviates from target by more than "
            f"{self.nutrition_deviation_threshold:.0%}"
            for macro in macros_out_of_tolerance(
                accuracy, self.nutrition_deviation_threshold
            )
        )
        return VerifiedMealPlanSuggestion(
            suggestion=suggestion,
            verified_foods=tuple(foods),
            verified_nutrition=total,
            overall_accuracy=overall,
            macro_accuracy=accuracy,
            notes=tuple(notes),
        )

    async def _verify_food(
        self,
        food: SuggestedFood,
        language: Language,
        session: PlanGenerationSession,
    ) -> VerifiedFood:
        translation = (
            translation_info(food.name, language)
            if language != Language.ENGLISH
            else None
        )
        search_name = translation.translated_name if translation else food.name
        lookup_error: str | None = None
        try:
            candidates = await self._lookup(search_name)
        except ProviderUnavailableError as exc:
            lookup_error = str(exc)
            candidates = []

        outcome = self.verifier.verify(food, candidates, translation)
        if isinstance(outcome, PendingSelection):
            session.raise_if_cancelled()
            decision_future = session.queue.enqueue(outcome)
            decision = await asyncio.wrap_future(decision_future)
            session.raise_if_cancelled()
            return self.verifier.apply_decision(outcome, decision)
        if lookup_error:
            return replace(outcome, notes=f"Reference lookup failed: {lookup_error}")
        return outcome

    async def _lookup(self, name: str) -> list[ReferenceFood]:
        terms = [name.strip().lower()]
        for term in normalize(name).search_terms:
            if term not in terms:
                terms.append(term)
        for term in terms:
            if not term:
                continue
            results = await self.reference_lookup.search(term)
            if results:
                unique: dict[int, ReferenceFood] = {}
                for result in results:
                    unique.setdefault(result.fdc_id, result)
                return list(unique.values())
        return []
