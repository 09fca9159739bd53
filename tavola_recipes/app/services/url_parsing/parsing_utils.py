"""General parsing utilities for recipe extraction.

Every helper here accepts whatever shape a page happened to publish and
collapses it to one scalar. None of them raise on malformed input.
"""

import html
import math
import re
from typing import Any, List, Optional

from tavola_recipes.app.services.url_parsing.constants import (
    COMMON_INGREDIENT_RE,
    MEASUREMENT_RE,
)

_TAG_RE = re.compile(r"<!--.*?-->|</?[A-Za-z][^<>]*>", re.S)
_ISO_DURATION_RE = re.compile(
    r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?",
    re.I,
)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_DIGITS_RE = re.compile(r"\d+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n+|<br\s*/?>|</p>", re.I)


def clean_text(text: Any) -> str:
    """Unescape entities, strip markup tags and normalize whitespace.

    Only ``<tag ...>`` shapes are removed, so a literal comparison such as
    ``5 < temp`` survives.
    """
    if text is None or isinstance(text, (dict, list)):
        return ""
    value = html.unescape(str(text))
    value = _TAG_RE.sub("", value)
    return re.sub(r"\s+", " ", value).strip()


def parse_duration(value: Any) -> Optional[int]:
    """Parse an ISO-8601 duration (e.g. PT1H30M), a number or a numeric string into minutes."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    for match in _ISO_DURATION_RE.finditer(value):
        days, hours, minutes, seconds = match.groups()
        if days is None and hours is None and minutes is None and seconds is None:
            continue
        total = int(days or 0) * 24 * 60 + int(hours or 0) * 60 + int(minutes or 0)
        secs = float(seconds or 0)
        if not math.isfinite(secs):
            return None
        return total + math.ceil(secs / 60)
    match = _LEADING_INT_RE.match(value)
    if match:
        return int(match.group(1))
    return None


def parse_servings(value: Any) -> Optional[int]:
    """Parse servings from a number, a string such as "4 servings", or a list of either."""
    if isinstance(value, list):
        return parse_servings(value[0]) if value else None
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _DIGITS_RE.search(value)
        if match:
            return int(match.group())
    return None


def parse_image(value: Any) -> str:
    """Extract an image URL from the string, list or ImageObject forms."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return parse_image(value[0]) if value else ""
    if isinstance(value, dict):
        url = value.get("url") or value.get("@id")
        if isinstance(url, str):
            return url.strip()
        return parse_image(url) if isinstance(url, list) else ""
    return ""


def parse_calories(nutrition: Any) -> Optional[int]:
    """Read the calorie count out of a NutritionInformation object."""
    if not isinstance(nutrition, dict):
        return None
    for key, raw in nutrition.items():
        if str(key).lower() not in {"calories", "calorie"}:
            continue
        if isinstance(raw, bool) or raw is None:
            return None
        match = _DIGITS_RE.search(str(raw))
        return int(match.group()) if match else None
    return None


def looks_like_ingredient(text: str) -> bool:
    """Rough check for a measured quantity or a common pantry noun."""
    if not text:
        return False
    return bool(MEASUREMENT_RE.search(text) or COMMON_INGREDIENT_RE.search(text))


def coerce_text_list(value: Any) -> List[str]:
    """Coerce a list-or-scalar field into a list of cleaned, non-empty strings."""
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    out: List[str] = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("text") or item.get("name")
        cleaned = clean_text(item)
        if cleaned:
            out.append(cleaned)
    return out


def split_paragraphs(text: str) -> List[str]:
    """Split a single block of instructions into one line per paragraph."""
    lines = (clean_text(part) for part in _PARAGRAPH_SPLIT_RE.split(text or ""))
    return [line for line in lines if line]


def _step_text(step: Any) -> str:
    if isinstance(step, str):
        return clean_text(step)
    if isinstance(step, dict):
        return clean_text(step.get("text") or step.get("name") or "")
    return ""


def extract_instruction_text(instructions: Any) -> List[str]:
    """Extract step text from plain strings, HowToStep and HowToSection entries."""
    if isinstance(instructions, str):
        return split_paragraphs(instructions)
    if isinstance(instructions, dict):
        instructions = [instructions]
    if not isinstance(instructions, list):
        return []

    steps: List[str] = []
    for entry in instructions:
        if isinstance(entry, dict) and isinstance(entry.get("itemListElement"), list):
            # HowToSection: one line per section
            parts = [_step_text(sub) for sub in entry["itemListElement"]]
            text = clean_text(" ".join(p for p in parts if p))
        else:
            text = _step_text(entry)
        if text:
            steps.append(text)
    return steps


def first_of(value: Any) -> Any:
    """Return the first element of a list, or the value itself."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def join_list(value: Any, sep: str = ", ") -> str:
    """Join a list of scalars into one cleaned string."""
    if isinstance(value, list):
        return sep.join(t for t in (clean_text(v) for v in value) if t)
    return clean_text(value)
