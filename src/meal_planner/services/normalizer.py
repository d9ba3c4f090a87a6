"""Food name normalization and English/Spanish translation."""

import re
from dataclasses import dataclass

from meal_planner.domain.meals import Language
from meal_planner.domain.selection import TranslationInfo

_SEGMENT_SPLIT = re.compile(
    r"\s*(?:[,+&]|\b(?:saut[eé]ed in|cooked in|fried in|cooked with|served with"
    r"|mixed with|topped with|with|and|con)\b)\s*",
    flags=re.IGNORECASE,
)

_QUALIFIERS = re.compile(
    r"\b(?:grilled|baked|saut[eé]ed|cooked|fresh|organic|raw|steamed|boiled"
    r"|roasted|fried|chopped|diced|sliced|natural|fresco|frescas?|a la|al|de)\b",
    flags=re.IGNORECASE,
)

_WHITESPACE = re.compile(r"\s+")

ENGLISH_TO_SPANISH: dict[str, str] = {
    "chicken breast": "pechuga de pollo",
    "chicken": "pollo",
    "salmon": "salmón",
    "fish": "pescado",
    "cod": "bacalao",
    "tuna": "atún",
    "beef": "carne de res",
    "turkey": "pavo",
    "eggs": "huevos",
    "egg": "huevo",
    "tofu": "tofu",
    "spinach": "espinacas",
    "broccoli": "brócoli",
    "lettuce": "lechuga",
    "tomato": "tomate",
    "onion": "cebolla",
    "garlic": "ajo",
    "carrot": "zanahoria",
    "pepper": "pimiento",
    "zucchini": "calabacín",
    "cucumber": "pepino",
    "vegetables": "verduras",
    "brown rice": "arroz integral",
    "rice": "arroz",
    "quinoa": "quinoa",
    "bread": "pan",
    "pasta": "pasta",
    "sweet potato": "camote",
    "potato": "papa",
    "apple": "manzana",
    "banana": "plátano",
    "orange": "naranja",
    "berries": "frutos del bosque",
    "strawberry": "fresa",
    "avocado": "aguacate",
    "lemon": "limón",
    "lime": "lima",
    "milk": "leche",
    "cheese": "queso",
    "yogurt": "yogur",
    "olive oil": "aceite de oliva",
    "oil": "aceite",
    "butter": "mantequilla",
    "grilled": "a la parrilla",
    "baked": "horneado",
    "sautéed": "salteado",
    "steamed": "al vapor",
    "boiled": "hervido",
    "roasted": "asado",
    "fried": "frito",
}

SPANISH_TO_ENGLISH: dict[str, str] = {
    spanish: english for english, spanish in ENGLISH_TO_SPANISH.items()
}
SPANISH_TO_ENGLISH.update(
    {
        "pollo a la plancha": "chicken breast grilled",
        "a la plancha": "grilled",
        "espinaca": "spinach",
        "papas": "potato",
        "patata": "potato",
        "carne": "beef",
    }
)

_TABLES: dict[tuple[Language, Language], dict[str, str]] = {
    (Language.ENGLISH, Language.SPANISH): ENGLISH_TO_SPANISH,
    (Language.SPANISH, Language.ENGLISH): SPANISH_TO_ENGLISH,
}


@dataclass(frozen=True)
class NormalizedName:
    """Search-ready decomposition of a free-text food name."""

    original: str
    primary: str
    secondary: tuple[str, ...]
    search_terms: tuple[str, ...]


def normalize(name: str) -> NormalizedName:
    """Split a food name into its primary and secondary ingredients."""
    segments = [_clean(segment) for segment in _SEGMENT_SPLIT.split(name)]
    segments = [segment for segment in segments if segment]
    whole = _clean(_SEGMENT_SPLIT.sub(" ", name))
    if not segments:
        fallback = _collapse(name.lower())
        return NormalizedName(
            original=name,
            primary=fallback,
            secondary=(),
            search_terms=(fallback,) if fallback else (),
        )

    terms: list[str] = []
    for term in [whole, *segments]:
        if term and term not in terms:
            terms.append(term)
    # Stable sort keeps the segment order for equal lengths.
    terms.sort(key=len, reverse=True)
    return NormalizedName(
        original=name,
        primary=segments[0],
        secondary=tuple(segments[1:]),
        search_terms=tuple(terms),
    )


def base_ingredient(name: str) -> str:
    """Return the primary ingredient of a food name."""
    return normalize(name).primary


def translate(text: str, source: Language, target: Language) -> str:
    """Translate known food terms; unknown words pass through unchanged."""
    if source == target:
        return text
    table = _TABLES[(source, target)]
    translated = text
    for phrase in sorted(table, key=len, reverse=True):
        pattern = re.compile(rf"\b{re.escape(phrase)}\b", flags=re.IGNORECASE)
        translated = pattern.sub(table[phrase], translated)
    return _collapse(translated)


def translation_info(name: str, language: Language) -> TranslationInfo:
    """Describe how a plan-language food name maps to an English search name."""
    if language == Language.ENGLISH:
        return TranslationInfo(
            original_name=name,
            translated_name=name,
            confidence=1.0,
        )
    translated = translate(name, language, Language.ENGLISH)
    normalized = normalize(translated)
    fully_known = _is_fully_translated(name, language)
    return TranslationInfo(
        original_name=name,
        translated_name=translated,
        confidence=0.9 if fully_known else 0.5,
        alternative_names=tuple(
            term for term in normalized.search_terms if term != translated.lower()
        ),
    )


def _is_fully_translated(name: str, language: Language) -> bool:
    table = _TABLES[(language, Language.ENGLISH)]
    remainder = name.lower()
    for phrase in sorted(table, key=len, reverse=True):
        remainder = re.sub(rf"\b{re.escape(phrase)}\b", " ", remainder)
    remainder = _QUALIFIERS.sub(" ", remainder)
    remainder = _SEGMENT_SPLIT.sub(" ", remainder)
    return not _collapse(remainder)


def _clean(segment: str) -> str:
    return _collapse(_QUALIFIERS.sub(" ", segment.lower()))


def _collapse(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip(" .;:-")
