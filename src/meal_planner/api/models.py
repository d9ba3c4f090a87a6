"""Pydantic models for the plan HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from meal_planner.domain.meals import Language, MealSlot
from meal_planner.domain.nutrition import ReferenceFood
from meal_planner.domain.plans import DEFAULT_SLOTS, MultiDayPlanRequest
from meal_planner.domain.selection import PendingSelection, SelectionStatus
from meal_planner.services.plan_jobs import PlanJob, PlanJobStatus
from meal_planner.services.selection_queue import SelectionQueue


class PlanCreateRequest(BaseModel):
    """Body of a new plan generation."""

    number_of_days: int = Field(ge=1, le=31)
    start_date: date
    daily_calories: float
    daily_protein_g: float = 0.0
    daily_carbs_g: float = 0.0
    daily_fat_g: float = 0.0
    meal_slots: list[MealSlot] = Field(default_factory=lambda: list(DEFAULT_SLOTS))
    cuisine_rotation: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    medical_conditions: list[str] = Field(default_factory=list)
    patient_id: UUID | None = None
    language: Language = Language.ENGLISH

    def to_domain(self) -> MultiDayPlanRequest:
        """Convert to the domain request."""
        return MultiDayPlanRequest(
            number_of_days=self.number_of_days,
            start_date=self.start_date,
            daily_calories=self.daily_calories,
            daily_protein_g=self.daily_protein_g,
            daily_carbs_g=self.daily_carbs_g,
            daily_fat_g=self.daily_fat_g,
            meal_slots=tuple(self.meal_slots),
            cuisine_rotation=tuple(self.cuisine_rotation),
            dietary_restrictions=tuple(self.dietary_restrictions),
            medical_conditions=tuple(self.medical_conditions),
            patient_id=self.patient_id,
            language=self.language,
        )


class ResolveSelectionRequest(BaseModel):
    """Reviewer decision for the current selection; null fdc_id means no match."""

    fdc_id: int | None = None
    token: UUID | None = None


class ProgressView(BaseModel):
    """Generation progress counters."""

    current: int
    total: int
    failed: int


class PlanJobView(BaseModel):
    """Status of a plan generation."""

    id: UUID
    status: PlanJobStatus
    progress: ProgressView
    selection_status: SelectionStatus
    error: str | None = None
    plan: dict[str, object] | None = None


class CandidateView(BaseModel):
    """A reference food offered for manual selection."""

    fdc_id: int
    description: str
    brand_name: str | None = None
    data_type: str | None = None
    confidence: float
    calories_per_100g: float
    protein_g_per_100g: float
    carbs_g_per_100g: float
    fat_g_per_100g: float


class SelectionView(BaseModel):
    """The food currently awaiting a reviewer decision."""

    token: UUID
    food_name: str
    portion_description: str
    gram_weight: float
    translated_name: str | None = None
    candidates: list[CandidateView]


class SelectionQueueView(BaseModel):
    """Selection queue state of a plan generation."""

    status: SelectionStatus
    waiting_count: int
    current: SelectionView | None = None


def job_view(job: PlanJob, plan: dict[str, object] | None = None) -> PlanJobView:
    """Build the status view of a job."""
    snapshot = job.session.progress.snapshot()
    return PlanJobView(
        id=job.id,
        status=job.status,
        progress=ProgressView(
            current=snapshot.current, total=snapshot.total, failed=snapshot.failed
        ),
        selection_status=job.session.queue.status,
        error=job.error,
        plan=plan,
    )


def queue_view(queue: SelectionQueue) -> SelectionQueueView:
    """Build the view of a selection queue."""
    current = queue.current
    return SelectionQueueView(
        status=queue.status,
        waiting_count=queue.waiting_count,
        current=_selection_view(current) if current is not None else None,
    )


def _selection_view(selection: PendingSelection) -> SelectionView:
    return SelectionView(
        token=selection.token,
        food_name=selection.food.name,
        portion_description=selection.food.portion_description,
        gram_weight=selection.food.gram_weight,
        translated_name=(
            selection.translation.translated_name if selection.translation else None
        ),
        candidates=[
            _candidate_view(candidate, confidence)
            for candidate, confidence in zip(
                selection.candidates, selection.confidences, strict=True
            )
        ],
    )


def _candidate_view(candidate: ReferenceFood, confidence: float) -> CandidateView:
    return CandidateView(
        fdc_id=candidate.fdc_id,
        description=candidate.description,
        brand_name=candidate.brand_name,
        data_type=candidate.data_type,
        confidence=confidence,
        calories_per_100g=candidate.per_100g.calories,
        protein_g_per_100g=candidate.per_100g.protein_g,
        carbs_g_per_100g=candidate.per_100g.carbs_g,
        fat_g_per_100g=candidate.per_100g.fat_g,
    )
