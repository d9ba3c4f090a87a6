"""Plan generation endpoints, including the manual selection surface."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder

from meal_planner.api.models import (
    PlanCreateRequest,
    PlanJobView,
    ResolveSelectionRequest,
    SelectionQueueView,
    job_view,
    queue_view,
)
from meal_planner.domain.documents import DocumentOptions
from meal_planner.domain.errors import InvalidRequestError
from meal_planner.services.plan_jobs import PlanJob, PlanJobStatus

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer


def _get_admin_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str | None = Depends(_get_admin_token),
) -> None:
    """Ensure requests include the admin token when one is configured."""
    if admin_token and x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(
    prefix="/plans", tags=["plans"], dependencies=[Depends(require_admin)]
)


def _get_job(request: Request, plan_id: UUID) -> PlanJob:
    container: AppContainer = request.app.state.container
    job = container.plan_jobs.get(plan_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return job


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def create_plan(body: PlanCreateRequest, request: Request) -> PlanJobView:
    """Start generating a multi-day plan in the background."""
    container: AppContainer = request.app.state.container
    try:
        job = container.plan_jobs.start(body.to_domain())
    except InvalidRequestError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return job_view(job)


@router.get("/{plan_id}")
async def get_plan(plan_id: UUID, request: Request) -> PlanJobView:
    """Return generation status, and the plan once it is complete."""
    job = _get_job(request, plan_id)
    plan = jsonable_encoder(asdict(job.plan)) if job.plan is not None else None
    return job_view(job, plan)


@router.get("/{plan_id}/selection")
async def get_selection(plan_id: UUID, request: Request) -> SelectionQueueView:
    """Return the food currently awaiting a manual reference selection."""
    job = _get_job(request, plan_id)
    return queue_view(job.session.queue)


@router.post("/{plan_id}/selection/resolve")
async def resolve_selection(
    plan_id: UUID, body: ResolveSelectionRequest, request: Request
) -> SelectionQueueView:
    """Accept one of the offered candidates, or none of them."""
    job = _get_job(request, plan_id)
    queue = job.session.queue
    current = queue.current
    if current is None or (body.token is not None and body.token != current.token):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="No matching selection"
        )
    choice = None
    if body.fdc_id is not None:
        choice = next(
            (item for item in current.candidates if item.fdc_id == body.fdc_id), None
        )
        if choice is None:
            raise HTTPException(
                status_code=422,
                detail=f"fdc_id {body.fdc_id} is not a candidate",
            )
    if not queue.resolve(choice):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT)
    return queue_view(queue)


@router.post("/{plan_id}/selection/skip")
async def skip_selection(plan_id: UUID, request: Request) -> SelectionQueueView:
    """Keep the AI estimate for the current food."""
    job = _get_job(request, plan_id)
    queue = job.session.queue
    if not queue.skip():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="No selection pending"
        )
    return queue_view(queue)


@router.post("/{plan_id}/cancel")
async def cancel_plan(plan_id: UUID, request: Request) -> PlanJobView:
    """Cancel a running generation; no plan is produced."""
    container: AppContainer = request.app.state.container
    job = container.plan_jobs.cancel(plan_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return job_view(job)


@router.get("/{plan_id}/document")
async def plan_document(  # noqa: PLR0913
    plan_id: UUID,
    request: Request,
    include_recipes: bool = True,
    include_shopping_list: bool = True,
    include_nutrition_analysis: bool = True,
    patient_label: str | None = None,
) -> dict[str, object]:
    """Return the plan as ordered document sections."""
    container: AppContainer = request.app.state.container
    job = _get_job(request, plan_id)
    if job.status != PlanJobStatus.COMPLETED or job.plan is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Plan is {job.status.value}",
        )
    sections = container.document_assembler.assemble(
        job.plan,
        patient_label=patient_label,
        options=DocumentOptions(
            include_recipes=include_recipes,
            include_shopping_list=include_shopping_list,
            include_nutrition_analysis=include_nutrition_analysis,
        ),
    )
    return {"sections": jsonable_encoder([asdict(section) for section in sections])}
