"""Error types raised by the meal planning pipeline."""


class MealPlannerError(Exception):
    """Base error for the meal planner."""


class InvalidRequestError(MealPlannerError):
    """Raised when a plan request is rejected before any provider call."""


class ProviderUnavailableError(MealPlannerError):
    """Raised when the LLM or reference provider cannot answer."""


class GenerationError(MealPlannerError):
    """Raised when a plan cannot produce any meal at all."""


class GenerationAbortedError(MealPlannerError):
    """Raised when plan generation is cancelled explicitly."""
