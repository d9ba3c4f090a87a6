"""Domain models for multi-day meal plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from meal_planner.domain.errors import InvalidRequestError
from meal_planner.domain.meals import Language, MealSlot, VerifiedMealPlanSuggestion

DEFAULT_SLOTS = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)


@dataclass(frozen=True)
class MultiDayPlanRequest:
    """Everything needed to generate a plan spanning several days."""

    number_of_days: int
    start_date: date
    daily_calories: float
    daily_protein_g: float
    daily_carbs_g: float
    daily_fat_g: float
    meal_slots: tuple[MealSlot, ...] = DEFAULT_SLOTS
    cuisine_rotation: tuple[str, ...] = ()
    dietary_restrictions: tuple[str, ...] = ()
    medical_conditions: tuple[str, ...] = ()
    patient_id: UUID | None = None
    language: Language = Language.ENGLISH

    def validate(self) -> None:
        """Raise InvalidRequestError when the request cannot be planned."""
        if self.daily_calories <= 0:
            raise InvalidRequestError("daily_calories must be positive")
        if self.number_of_days <= 0:
            raise InvalidRequestError("number_of_days must be positive")
        if not self.meal_slots:
            raise InvalidRequestError("meal_slots must not be empty")
        if min(self.daily_protein_g, self.daily_carbs_g, self.daily_fat_g) < 0:
            raise InvalidRequestError("macro targets must not be negative")

    @property
    def total_meals(self) -> int:
        """Number of meal generations the plan needs."""
        return self.number_of_days * len(self.meal_slots)


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Verified totals for one day."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    average_accuracy: float


@dataclass(frozen=True)
class DailyMealPlan:
    """The meals of a single calendar day."""

    day_number: int
    date: date
    meals: tuple[VerifiedMealPlanSuggestion, ...]
    summary: DailyNutritionSummary
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class MultiDayNutritionSummary:
    """Totals and daily averages across the whole plan."""

    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    average_daily_calories: float
    average_daily_protein_g: float
    average_daily_carbs_g: float
    average_daily_fat_g: float
    overall_accuracy: float


@dataclass(frozen=True)
class MultiDayMealPlan:
    """A finished multi-day plan."""

    id: UUID
    patient_id: UUID | None
    start_date: date
    number_of_days: int
    days: tuple[DailyMealPlan, ...]
    summary: MultiDayNutritionSummary
    language: Language
    generated_at: datetime
    meal_slots: tuple[MealSlot, ...] = field(default=DEFAULT_SLOTS)

    @property
    def end_date(self) -> date:
        """Date of the last planned day."""
        return self.days[-1].date if self.days else self.start_date
