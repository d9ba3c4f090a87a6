"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from meal_planner.adapters.demo_fdc_client import DemoFdcClient
from meal_planner.adapters.demo_meal_provider import DemoMealProvider
from meal_planner.adapters.fdc_client import FdcClient, HttpxFdcClient
from meal_planner.adapters.openai_meal_client import OpenAIMealClient
from meal_planner.config import LIVE_MODE, Settings, parse_csv_list, resolve_mode
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.documents import PlanDocumentAssembler
from meal_planner.services.meal_suggestions import (
    MealSuggestionProvider,
    MealSuggestionService,
)
from meal_planner.services.nutrition import NutritionService
from meal_planner.services.plan_jobs import PlanJobService
from meal_planner.services.planner import MultiDayPlanService
from meal_planner.services.verifier import FoodVerifier

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    llm_mode: str
    fdc_mode: str
    meal_provider: MealSuggestionProvider
    nutrition_service: NutritionService
    planner: MultiDayPlanService
    plan_jobs: PlanJobService
    document_assembler: PlanDocumentAssembler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    llm_mode = resolve_mode(
        resolved_settings.llm_mode, resolved_settings.openai_api_key
    )
    fdc_mode = resolve_mode(resolved_settings.fdc_mode, resolved_settings.fdc_api_key)
    for name, requested, effective in (
        ("llm", resolved_settings.llm_mode, llm_mode),
        ("fdc", resolved_settings.fdc_mode, fdc_mode),
    ):
        if requested.strip().lower() == LIVE_MODE and effective != LIVE_MODE:
            _logger.warning("%s mode is live but no API key is set; using demo", name)

    openai_client: OpenAIMealClient | None = None
    meal_provider: MealSuggestionProvider
    if llm_mode == LIVE_MODE and resolved_settings.openai_api_key:
        openai_client = OpenAIMealClient.create(resolved_settings.openai_api_key)
        meal_provider = MealSuggestionService(
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    else:
        meal_provider = DemoMealProvider()

    fdc_client: FdcClient
    if fdc_mode == LIVE_MODE and resolved_settings.fdc_api_key:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            data_types=parse_csv_list(resolved_settings.fdc_data_types),
        )
    else:
        fdc_client = DemoFdcClient()

    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        page_size=resolved_settings.fdc_page_size,
        search_ttl_seconds=resolved_settings.search_cache_ttl_seconds,
        retry_attempts=resolved_settings.lookup_retry_attempts,
        retry_delay_seconds=resolved_settings.lookup_retry_delay_seconds,
    )
    planner = MultiDayPlanService(
        meal_provider=meal_provider,
        reference_lookup=nutrition_service,
        verifier=FoodVerifier(
            auto_accept_threshold=resolved_settings.auto_accept_threshold,
            auto_reject_floor=resolved_settings.auto_reject_floor,
        ),
        retry_attempts=resolved_settings.generation_retry_attempts,
        nutrition_deviation_threshold=resolved_settings.nutrition_deviation_threshold,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        llm_mode=llm_mode,
        fdc_mode=fdc_mode,
        meal_provider=meal_provider,
        nutrition_service=nutrition_service,
        planner=planner,
        plan_jobs=PlanJobService(
            planner, max_finished_jobs=resolved_settings.max_finished_jobs
        ),
        document_assembler=PlanDocumentAssembler(),
        close_resources=close_resources,
    )
