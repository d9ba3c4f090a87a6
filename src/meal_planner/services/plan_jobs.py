"""Background plan generations tracked by id."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from meal_planner.domain.errors import GenerationAbortedError, MealPlannerError
from meal_planner.domain.plans import MultiDayMealPlan, MultiDayPlanRequest
from meal_planner.services.planner import MultiDayPlanService
from meal_planner.services.sessions import PlanGenerationSession

_logger = logging.getLogger(__name__)


class PlanJobStatus(StrEnum):
    """Lifecycle of a background generation."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class PlanJob:
    """One generation run and its outcome."""

    request: MultiDayPlanRequest
    session: PlanGenerationSession
    status: PlanJobStatus = PlanJobStatus.RUNNING
    plan: MultiDayMealPlan | None = None
    error: str | None = None
    task: "asyncio.Task[None] | None" = field(default=None, repr=False)

    @property
    def id(self) -> UUID:
        """Job id, shared with its session."""
        return self.session.id


@dataclass
class PlanJobService:
    """Starts generations on the running loop and keeps their results.

    Only the most recent `max_finished_jobs` finished jobs are retained; older
    ones are dropped when a new job starts.
    """

    planner: MultiDayPlanService
    jobs: dict[UUID, PlanJob] = field(default_factory=dict)
    max_finished_jobs: int = 100

    def start(self, request: MultiDayPlanRequest) -> PlanJob:
        """Validate the request and schedule its generation."""
        request.validate()
        self._prune()
        job = PlanJob(request=request, session=PlanGenerationSession())
        self.jobs[job.id] = job
        job.task = asyncio.create_task(self._run(job))
        _logger.info("Plan job started: id=%s", job.id)
        return job

    def get(self, job_id: UUID) -> PlanJob | None:
        """Return a job by id, if present."""
        return self.jobs.get(job_id)

    def cancel(self, job_id: UUID) -> PlanJob | None:
        """Cancel a running job; finished jobs are left untouched."""
        job = self.jobs.get(job_id)
        if job is None:
            return None
        if job.status == PlanJobStatus.RUNNING:
            job.session.cancel()
            job.status = PlanJobStatus.CANCELLED
        return job

    async def wait(self, job_id: UUID) -> PlanJob | None:
        """Wait for a job's task to finish."""
        job = self.jobs.get(job_id)
        if job is not None and job.task is not None:
            await job.task
        return job

    async def shutdown(self) -> None:
        """Cancel running jobs and wait for their tasks."""
        running = [job for job in self.jobs.values() if job.task is not None]
        for job in running:
            self.cancel(job.id)
        await asyncio.gather(
            *(job.task for job in running if job.task is not None),
            return_exceptions=True,
        )

    def _prune(self) -> None:
        finished = [
            job_id
            for job_id, job in self.jobs.items()
            if job.status != PlanJobStatus.RUNNING
            and (job.task is None or job.task.done())
        ]
        excess = len(finished) - self.max_finished_jobs
        for job_id in finished[: max(excess, 0)]:
            del self.jobs[job_id]
        if excess > 0:
            _logger.debug("Dropped %s finished plan jobs", excess)

    async def _run(self, job: PlanJob) -> None:
        try:
            plan = await self.planner.generate(job.request, job.session)
        except GenerationAbortedError:
            job.status = PlanJobStatus.CANCELLED
        except MealPlannerError as exc:
            _logger.warning("Plan job failed: id=%s error=%s", job.id, exc)
            job.status = PlanJobStatus.FAILED
            job.error = str(exc)
        except Exception as exc:
            _logger.exception("Plan job crashed: id=%s", job.id)
            job.status = PlanJobStatus.FAILED
            job.error = str(exc) or type(exc).__name__
        else:
            job.plan = plan
            job.status = PlanJobStatus.COMPLETED
            _logger.info("Plan job completed: id=%s", job.id)
