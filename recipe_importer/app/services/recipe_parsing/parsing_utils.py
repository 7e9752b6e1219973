"""General parsing utilities for recipe extraction."""

import math
import re
from typing import Any, List, Optional

_ISO_DURATION_RE = re.compile(r"\bP(?:(\d+)D)?T(?:(\d+)H)?(?:(\d+)M)?", re.I)
_HOURS_RE = re.compile(r"(?<![\d.])(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)\b", re.I)
_MINUTES_RE = re.compile(r"(?<![\d.])(\d+(?:\.\d+)?)\s*min", re.I)


def clean_text(text: Optional[str]) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def parse_iso8601_duration(duration: str) -> Optional[int]:
    """Parse an ISO-8601 duration such as PT1H30M into minutes.

    Returns None when no hour or minute component is present.
    """
    if not duration:
        return None
    match = _ISO_DURATION_RE.search(duration)
    if not match or not any(match.groups()):
        return None
    try:
        days = int(match.group(1) or 0)
        hours = int(match.group(2) or 0)
        minutes = int(match.group(3) or 0)
    except ValueError:
        return None
    return days * 24 * 60 + hours * 60 + minutes


def parse_duration_minutes(text: Optional[str]) -> Optional[int]:
    """Parse an ISO-8601 or human-readable duration ("1 hour 15 minutes") into minutes.

    Hour and minute mentions are independent and summed. Returns None for
    empty input or a non-positive total; never raises.
    """
    if not text or not isinstance(text, str):
        return None
    total = parse_iso8601_duration(text)
    if total is None:
        hours = _HOURS_RE.search(text)
        minutes = _MINUTES_RE.search(text)
        exact = 0.0
        if hours:
            exact += float(hours.group(1)) * 60
        if minutes:
            exact += float(minutes.group(1))
        if not math.isfinite(exact):
            return None
        total = int(round(exact))
    return total if total > 0 else None


def coerce_number(value: Any) -> Optional[float]:
    """Return value as a float only if it is a real number (bools excluded)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    return None


def parse_servings(value: Any) -> Optional[int]:
    """Parse servings from a schema.org recipeYield (number, string or list)."""
    if value is None:
        return None
    if isinstance(value, list):
        for item in value:
            parsed = parse_servings(item)
            if parsed:
                return parsed
        return None
    number = coerce_number(value)
    if number is not None:
        return int(round(number)) or None
    if isinstance(value, str):
        match = re.search(r"\d{1,6}", value)
        if match:
            return int(match.group()) or None
    return None


def extract_image(value: Any) -> Optional[str]:
    """Extract image URL from various schema.org image formats."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        url = value.get("url") or value.get("contentUrl")
        return url if isinstance(url, str) and url else None
    if isinstance(value, list):
        for item in value:
            found = extract_image(item)
            if found:
                return found
    return None


def extract_instruction_text(instructions: Any) -> List[str]:
    """Extract step text from schema.org instruction formats (strings, HowToStep, HowToSection)."""
    steps: List[str] = []
    if isinstance(instructions, list):
        for entry in instructions:
            if isinstance(entry, str):
                cleaned = clean_text(entry)
                if cleaned:
                    steps.append(cleaned)
            elif isinstance(entry, dict):
                if entry.get("itemListElement"):
                    steps.extend(extract_instruction_text(entry["itemListElement"]))
                    continue
                text_val = entry.get("text") or entry.get("description") or entry.get("name")
                cleaned = clean_text(text_val if isinstance(text_val, str) else "")
                if cleaned:
                    steps.append(cleaned)
    elif isinstance(instructions, str):
        for line in re.split(r"\n+", instructions):
            cleaned = clean_text(line)
            if cleaned:
                steps.append(cleaned)
    return steps
