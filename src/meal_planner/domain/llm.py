"""Models for structured meal suggestions returned by the LLM."""

from pydantic import BaseModel, Field


class AIFood(BaseModel):
    """Single food in an LLM meal response."""

    food_name: str
    portion_description: str
    gram_weight: float
    calories: float
    protein: float
    carbs: float
    fat: float


class AINutrition(BaseModel):
    """Nutrition totals claimed by the LLM."""

    calories: float
    protein: float
    carbs: float
    fat: float


class AIMealResponse(BaseModel):
    """Structured output for meal generation."""

    meal_name: str = Field(min_length=1)
    foods: list[AIFood] = Field(min_length=1)
    total_nutrition: AINutrition
    preparation_notes: str = ""
    nutritionist_notes: str = ""
