"""Structured document content handed to a renderer."""

from dataclasses import dataclass
from enum import StrEnum


class SectionType(StrEnum):
    """Kinds of document sections."""

    COVER = "cover"
    SUMMARY = "summary"
    DAILY_PLANS = "dailyPlans"
    RECIPES = "recipes"
    SHOPPING_LIST = "shoppingList"
    NUTRITION_ANALYSIS = "nutritionAnalysis"


@dataclass(frozen=True)
class ContentSection:
    """An ordered block of text with a layout hint."""

    type: SectionType
    title: str
    lines: tuple[str, ...]
    page_break_before: bool = False


@dataclass(frozen=True)
class DocumentOptions:
    """Which optional sections to include."""

    include_recipes: bool = True
    include_shopping_list: bool = True
    include_nutrition_analysis: bool = True
