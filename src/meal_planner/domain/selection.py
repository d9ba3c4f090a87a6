"""Domain models for manual reference-food selection."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID, uuid4

from meal_planner.domain.meals import SuggestedFood
from meal_planner.domain.nutrition import ReferenceFood


class SelectionStatus(StrEnum):
    """Observable state of a selection queue."""

    NO_SELECTIONS_NEEDED = "no_selections_needed"
    WAITING_IN_QUEUE = "waiting_in_queue"
    SELECTING_FOOD = "selecting_food"


@dataclass(frozen=True)
class TranslationInfo:
    """How a food name was rendered for the reference search."""

    original_name: str
    translated_name: str
    confidence: float
    alternative_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class PendingSelection:
    """An ambiguous food waiting for a human decision."""

    food: SuggestedFood
    candidates: tuple[ReferenceFood, ...]
    confidences: tuple[float, ...]
    translation: TranslationInfo | None = None
    token: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class SelectionDecision:
    """The human answer for a pending selection."""

    token: UUID
    choice: ReferenceFood | None
    skipped: bool = False
