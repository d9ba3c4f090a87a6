"""OpenAI Responses API client for meal generation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_planner.domain.errors import ProviderUnavailableError
from meal_planner.services.meal_suggestions import MealCompletionClient


@dataclass
class OpenAIMealClient(MealCompletionClient):
    """Meal completion client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealClient":
        """Create an OpenAI meal client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_suggestion",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise ProviderUnavailableError("OpenAI returned an empty response")
        try:
            return json.loads(clean_json_response(output_text))
        except json.JSONDecodeError as exc:
            raise ProviderUnavailableError("OpenAI returned invalid JSON") from exc

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()


def clean_json_response(text: str) -> str:
    """Strip code fences and surrounding prose from a JSON reply."""
    cleaned = text.replace("```json", "").replace("```", "").strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned
