"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionValues:
    """Calories and macronutrients for a portion or a total."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @classmethod
    def zero(cls) -> "NutritionValues":
        """Return an empty nutrition total."""
        return cls(0.0, 0.0, 0.0, 0.0)

    def __add__(self, other: "NutritionValues") -> "NutritionValues":
        return NutritionValues(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def scaled(self, factor: float) -> "NutritionValues":
        """Return the values multiplied by a factor."""
        return NutritionValues(
            calories=self.calories * factor,
            protein_g=self.protein_g * factor,
            carbs_g=self.carbs_g * factor,
            fat_g=self.fat_g * factor,
        )


@dataclass(frozen=True)
class ReferenceFood:
    """A USDA FoodData Central record with per-100g macros."""

    fdc_id: int
    description: str
    per_100g: NutritionValues
    brand_name: str | None = None
    data_type: str | None = None
    serving_size_g: float | None = None
