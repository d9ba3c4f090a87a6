"""Domain models for single meals and their verification."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from meal_planner.domain.nutrition import NutritionValues, ReferenceFood


class MealSlot(StrEnum):
    """A meal position within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Language(StrEnum):
    """Output language of a plan."""

    ENGLISH = "en"
    SPANISH = "es"


@dataclass(frozen=True)
class SuggestedFood:
    """A food proposed by the LLM with its own nutrition estimate."""

    name: str
    portion_description: str
    gram_weight: float
    estimated_nutrition: NutritionValues


@dataclass(frozen=True)
class MealPlanRequest:
    """Targets and constraints for generating one meal."""

    target_calories: float
    target_protein_g: float
    target_carbs_g: float
    target_fat_g: float
    meal_slot: MealSlot
    cuisine_preference: str | None = None
    dietary_restrictions: tuple[str, ...] = ()
    medical_conditions: tuple[str, ...] = ()
    patient_id: UUID | None = None
    variety_instructions: str | None = None
    language: Language = Language.ENGLISH

    @property
    def targets(self) -> NutritionValues:
        """Return the targets as nutrition values."""
        return NutritionValues(
            calories=self.target_calories,
            protein_g=self.target_protein_g,
            carbs_g=self.target_carbs_g,
            fat_g=self.target_fat_g,
        )


@dataclass(frozen=True)
class MealPlanSuggestion:
    """A meal as returned by the meal suggestion provider."""

    meal_name: str
    meal_slot: MealSlot
    foods: tuple[SuggestedFood, ...]
    total_nutrition: NutritionValues
    preparation_notes: str = ""
    nutritionist_notes: str = ""


@dataclass(frozen=True)
class VerifiedFood:
    """A suggested food reconciled against the reference database."""

    suggested: SuggestedFood
    matched: ReferenceFood | None
    verified_nutrition: NutritionValues
    confidence: float
    is_verified: bool
    notes: str = ""


@dataclass(frozen=True)
class MacroAccuracy:
    """Per-macro closeness of verified nutrition to the meal targets."""

    calories: float
    protein: float
    carbs: float
    fat: float

    @property
    def overall(self) -> float:
        """Mean of the four macro accuracies."""
        return (self.calories + self.protein + self.carbs + self.fat) / 4.0


@dataclass(frozen=True)
class VerifiedMealPlanSuggestion:
    """A meal whose foods have all been verified."""

    suggestion: MealPlanSuggestion
    verified_foods: tuple[VerifiedFood, ...]
    verified_nutrition: NutritionValues
    overall_accuracy: float
    macro_accuracy: MacroAccuracy
    notes: tuple[str, ...] = ()
