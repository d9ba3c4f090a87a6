"""User-facing strings keyed by language and string id."""

from meal_planner.domain.meals import Language, MealSlot

_STRINGS: dict[tuple[Language, str], str] = {
    (Language.ENGLISH, "meal_plan"): "Meal Plan",
    (Language.ENGLISH, "breakfast"): "Breakfast",
    (Language.ENGLISH, "lunch"): "Lunch",
    (Language.ENGLISH, "dinner"): "Dinner",
    (Language.ENGLISH, "snack"): "Snack",
    (Language.ENGLISH, "calories"): "Calories",
    (Language.ENGLISH, "protein"): "Protein",
    (Language.ENGLISH, "carbohydrates"): "Carbohydrates",
    (Language.ENGLISH, "fat"): "Fat",
    (Language.ENGLISH, "preparation_notes"): "Preparation Notes",
    (Language.ENGLISH, "nutritionist_notes"): "Nutritionist Notes",
    (Language.ENGLISH, "shopping_list"): "Shopping List",
    (Language.ENGLISH, "recipes"): "Recipes",
    (Language.ENGLISH, "cover_title"): "Personalized Meal Plan",
    (Language.ENGLISH, "patient"): "Patient",
    (Language.ENGLISH, "general_plan"): "General Plan",
    (Language.ENGLISH, "period"): "Period",
    (Language.ENGLISH, "generated_on"): "Generated on",
    (Language.ENGLISH, "verified_with"): (
        "Nutrition verified against USDA FoodData Central"
    ),
    (Language.ENGLISH, "plan_summary"): "Plan Summary",
    (Language.ENGLISH, "days"): "Days",
    (Language.ENGLISH, "total_meals"): "Total meals",
    (Language.ENGLISH, "average_daily_calories"): "Average daily calories",
    (Language.ENGLISH, "overall_accuracy"): "Overall accuracy",
    (Language.ENGLISH, "daily_plans"): "Daily Plans",
    (Language.ENGLISH, "day"): "Day",
    (Language.ENGLISH, "day_total"): "Day total",
    (Language.ENGLISH, "omitted_meal"): "Meal omitted",
    (Language.ENGLISH, "ingredients"): "Ingredients",
    (Language.ENGLISH, "preparation"): "Preparation",
    (Language.ENGLISH, "default_preparation"): (
        "Prepare the ingredients in the listed amounts and cook each one "
        "with an appropriate technique."
    ),
    (Language.ENGLISH, "shopping_note"): "Quantities cover the whole plan.",
    (Language.ENGLISH, "nutrition_analysis"): "Nutrition Analysis",
    (Language.ENGLISH, "totals"): "Totals",
    (Language.ENGLISH, "daily_average"): "Daily average",
    (Language.ENGLISH, "calorie_distribution"): "Calorie distribution",
    (Language.ENGLISH, "accuracy_grade"): "Accuracy grade",
    (Language.SPANISH, "meal_plan"): "Plan de Comidas",
    (Language.SPANISH, "breakfast"): "Desayuno",
    (Language.SPANISH, "lunch"): "Almuerzo",
    (Language.SPANISH, "dinner"): "Cena",
    (Language.SPANISH, "snack"): "Merienda",
    (Language.SPANISH, "calories"): "Calorías",
    (Language.SPANISH, "protein"): "Proteína",
    (Language.SPANISH, "carbohydrates"): "Carbohidratos",
    (Language.SPANISH, "fat"): "Grasa",
    (Language.SPANISH, "preparation_notes"): "Notas de Preparación",
    (Language.SPANISH, "nutritionist_notes"): "Notas del Nutricionista",
    (Language.SPANISH, "shopping_list"): "Lista de Compras",
    (Language.SPANISH, "recipes"): "Recetas",
    (Language.SPANISH, "cover_title"): "Plan de Alimentación Personalizado",
    (Language.SPANISH, "patient"): "Paciente",
    (Language.SPANISH, "general_plan"): "Plan General",
    (Language.SPANISH, "period"): "Periodo",
    (Language.SPANISH, "generated_on"): "Fecha de creación",
    (Language.SPANISH, "verified_with"): "Verificación nutricional USDA",
    (Language.SPANISH, "plan_summary"): "Resumen del Plan",
    (Language.SPANISH, "days"): "Días",
    (Language.SPANISH, "total_meals"): "Total de comidas",
    (Language.SPANISH, "average_daily_calories"): "Promedio diario de calorías",
    (Language.SPANISH, "overall_accuracy"): "Precisión general",
    (Language.SPANISH, "daily_plans"): "Plan Diario",
    (Language.SPANISH, "day"): "Día",
    (Language.SPANISH, "day_total"): "Total del día",
    (Language.SPANISH, "omitted_meal"): "Comida omitida",
    (Language.SPANISH, "ingredients"): "Ingredientes",
    (Language.SPANISH, "preparation"): "Preparación",
    (Language.SPANISH, "default_preparation"): (
        "Preparar todos los ingredientes según las cantidades indicadas y "
        "cocinar cada uno con la técnica apropiada."
    ),
    (Language.SPANISH, "shopping_note"): "Las cantidades son para el plan completo.",
    (Language.SPANISH, "nutrition_analysis"): "Análisis Nutricional",
    (Language.SPANISH, "totals"): "Totales",
    (Language.SPANISH, "daily_average"): "Promedio diario",
    (Language.SPANISH, "calorie_distribution"): "Distribución calórica",
    (Language.SPANISH, "accuracy_grade"): "Calificación de precisión",
}


def text(language: Language, string_id: str) -> str:
    """Return a localized string, falling back to English, then the id."""
    value = _STRINGS.get((language, string_id))
    if value is not None:
        return value
    return _STRINGS.get((Language.ENGLISH, string_id), string_id)


def slot_name(language: Language, slot: MealSlot) -> str:
    """Return the display name of a meal slot."""
    return text(language, slot.value)
