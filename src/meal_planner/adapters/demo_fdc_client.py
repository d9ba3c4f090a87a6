"""Offline FoodData Central stand-in used in demo mode."""

from dataclasses import dataclass, field

_CATALOGUE: list[dict[str, object]] = [
    {
        "fdcId": 171077,
        "description": "Chicken, broilers or fryers, breast, meat only, cooked, grilled",
        "macros": (165, 31.02, 0, 3.57),
    },
    {
        "fdcId": 168876,
        "description": "Rice, brown, long-grain, cooked",
        "macros": (111, 2.58, 23, 0.9),
    },
    {
        "fdcId": 170379,
        "description": "Broccoli, cooked, boiled, drained, without salt",
        "macros": (34, 2.38, 7.18, 0.41),
    },
    {
        "fdcId": 175167,
        "description": "Salmon, Atlantic, farmed, cooked, dry heat",
        "macros": (206, 25.44, 0, 12.35),
    },
    {
        "fdcId": 168482,
        "description": "Sweet potato, cooked, baked in skin, without salt",
        "macros": (90, 2.01, 20.71, 0.15),
    },
    {
        "fdcId": 168462,
        "description": "Spinach, cooked, boiled, drained, without salt",
        "macros": (23, 2.97, 3.75, 0.26),
    },
    {
        "fdcId": 169414,
        "description": "Oil, olive, salad or cooking",
        "macros": (884, 0, 0, 100),
    },
    {
        "fdcId": 169057,
        "description": "Egg, whole, cooked, hard-boiled",
        "macros": (155, 12.58, 1.12, 10.61),
    },
]

# FDC nutrient ids for energy, protein, carbohydrate, and fat.
_NUTRIENT_ORDER = (1008, 1003, 1005, 1004)


@dataclass
class DemoFdcClient:
    """Answers searches from a fixed catalogue in FDC wire format."""

    catalogue: list[dict[str, object]] = field(default_factory=lambda: _CATALOGUE)

    async def search_foods(
        self, query: str, page_size: int = 25
    ) -> dict[str, object]:
        """Return catalogue entries sharing a word with the query."""
        words = {word.strip(",.") for word in query.lower().split()}
        words.discard("")
        foods = [
            _to_payload(entry)
            for entry in self.catalogue
            if words & _description_words(str(entry["description"]))
        ]
        return {"totalHits": len(foods), "foods": foods[:page_size]}

    async def close(self) -> None:
        """Nothing to release."""


def _description_words(description: str) -> set[str]:
    return {word.strip(",.") for word in description.lower().split()}


def _to_payload(entry: dict[str, object]) -> dict[str, object]:
    macros = tuple(entry["macros"])  # type: ignore[arg-type]
    return {
        "fdcId": entry["fdcId"],
        "description": entry["description"],
        "dataType": "Foundation",
        "servingSize": 100,
        "foodNutrients": [
            {"nutrientId": nutrient_id, "value": float(amount)}
            for nutrient_id, amount in zip(_NUTRIENT_ORDER, macros, strict=True)
        ],
    }
