"""
Robust JSON parsing utilities for LLM responses.

Handles common issues with LLM-generated JSON:
- Markdown code blocks (```json ... ```)
- Trailing commas
- Comments
- JSON embedded in surrounding prose
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


def extract_json_from_text(text: str) -> str:
    """
    Extract JSON from text that may contain markdown or other content.

    Handles:
    - ```json ... ``` code blocks
    - ``` ... ``` code blocks
    - Raw JSON objects/arrays
    - JSON embedded in other text

    Args:
        text: Raw text that may contain JSON

    Returns:
        Extracted JSON string (may still need parsing)
    """
    text = text.strip()

    patterns = [
        r"```json\s*([\s\S]*?)\s*```",
        r"```\s*([\s\S]*?)\s*```",
    ]

    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match.group(1).strip()

    # Whichever bracket opens first decides between object and array
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if starts:
        start = min(starts)
        closer = "}" if text[start] == "{" else "]"
        end = text.rfind(closer)
        if end > start:
            return text[start : end + 1]

    return text


def clean_json_string(text: str) -> str:
    """
    Clean common JSON issues from LLM output.

    Handles:
    - Trailing commas
    - JavaScript-style comments

    Args:
        text: JSON-like string

    Returns:
        Cleaned JSON string
    """
    text = re.sub(r"(?<![:\"])//[^\n]*", "", text)
    text = re.sub(r"/\*[\s\S]*?\*/", "", text)
    text = re.sub(r",\s*([\}\]])", r"\1", text)
    return text.strip()


def parse_json_value(text: str | None) -> Any:
    """
    Parse any JSON value with fallback strategies.

    Tries in order:
    1. Direct JSON parsing
    2. Extract from markdown/prose + parse
    3. Clean common issues + parse

    Returns:
        The parsed value, or None if nothing parses
    """
    if not text or not text.strip():
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    extracted = extract_json_from_text(text)
    if extracted != text:
        try:
            return json.loads(extracted)
        except json.JSONDecodeError:
            pass

    try:
        return json.loads(clean_json_string(extracted))
    except json.JSONDecodeError:
        logger.warning(f"Failed to parse JSON after all strategies: {text[:100]}...")
        return None


def parse_tags_json(value: str | dict[str, Any] | list[Any] | None) -> list[dict[str, str]]:
    """
    Normalize a tag-generation reply into ``[{"name", "description"}]``.

    Accepts ``{"tags": [...]}``, a bare array, or raw text holding either.
    Array items may be objects or plain strings; entries without a
    usable name are dropped.
    """
    if isinstance(value, str) or value is None:
        value = parse_json_value(value)

    if isinstance(value, dict):
        value = value.get("tags")

    if not isinstance(value, list):
        return []

    tags: list[dict[str, str]] = []
    for item in value:
        if isinstance(item, str):
            name, description = item, ""
        elif isinstance(item, dict):
            name = item.get("name")
            description = item.get("description") or ""
        else:
            continue
        if not isinstance(name, str) or not name.strip():
            continue
        tags.append({"name": name.strip(), "description": str(description).strip()})
    return tags


__all__ = [
    "extract_json_from_text",
    "clean_json_string",
    "parse_json_value",
    "parse_tags_json",
]
