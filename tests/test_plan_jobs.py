"""Tests for background plan jobs and generation sessions."""

import asyncio

from meal_planner.domain.meals import MealSlot
from meal_planner.domain.plans import MultiDayPlanRequest
from meal_planner.domain.selection import SelectionStatus
from meal_planner.services.plan_jobs import PlanJob, PlanJobService, PlanJobStatus
from meal_planner.services.planner import MultiDayPlanService
from meal_planner.services.sessions import GenerationProgress, PlanGenerationSession
from tests.conftest import FakeMealProvider, suggested_food


def test_progress_counters() -> None:
    progress = GenerationProgress()
    progress.start(3)
    progress.advance()
    progress.advance(failed=True)

    snapshot = progress.snapshot()

    assert (snapshot.current, snapshot.total, snapshot.failed) == (2, 3, 1)


def test_session_cancel_is_idempotent() -> None:
    session = PlanGenerationSession()

    session.cancel()
    session.cancel()

    assert session.is_cancelled
    assert session.queue.status == SelectionStatus.NO_SELECTIONS_NEEDED


def test_job_completes(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    service = PlanJobService(planner)

    async def run() -> None:
        job = service.start(plan_request)
        assert job.status == PlanJobStatus.RUNNING
        await service.wait(job.id)

    asyncio.run(run())

    (job,) = service.jobs.values()
    assert job.status == PlanJobStatus.COMPLETED
    assert job.plan is not None
    assert len(job.plan.days) == 3
    assert service.get(job.id) is job


def test_job_failure_is_recorded(
    planner: MultiDayPlanService,
    meal_provider: FakeMealProvider,
    plan_request: MultiDayPlanRequest,
) -> None:
    meal_provider.failing_slots = {slot: 100 for slot in MealSlot}
    service = PlanJobService(planner)

    async def run() -> None:
        job = service.start(plan_request)
        await service.wait(job.id)

    asyncio.run(run())

    (job,) = service.jobs.values()
    assert job.status == PlanJobStatus.FAILED
    assert job.plan is None
    assert job.error


def test_cancelled_job_has_no_plan(
    planner: MultiDayPlanService,
    meal_provider: FakeMealProvider,
    plan_request: MultiDayPlanRequest,
) -> None:
    meal_provider.extra_foods = (suggested_food("Rice cooked", 200),)
    service = PlanJobService(planner)

    async def run() -> None:
        job = service.start(plan_request)
        while job.session.queue.current is None:
            await asyncio.sleep(0.001)
        service.cancel(job.id)
        await service.wait(job.id)

    asyncio.run(run())

    (job,) = service.jobs.values()
    assert job.status == PlanJobStatus.CANCELLED
    assert job.plan is None
    assert job.session.is_cancelled


def test_cancel_unknown_job_returns_none(planner: MultiDayPlanService) -> None:
    service = PlanJobService(planner)

    assert service.cancel(PlanGenerationSession().id) is None


def test_only_recent_finished_jobs_are_retained(
    planner: MultiDayPlanService, plan_request: MultiDayPlanRequest
) -> None:
    service = PlanJobService(planner, max_finished_jobs=2)

    async def run() -> list[PlanJob]:
        started = []
        for _ in range(4):
            job = service.start(plan_request)
            await service.wait(job.id)
            started.append(job)
        return started

    started = asyncio.run(run())

    assert list(service.jobs) == [job.id for job in started[1:]]
    assert service.get(started[0].id) is None
