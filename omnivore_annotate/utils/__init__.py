"""
omnivore-annotate Utilities

Common utilities used across the application.
"""

from .json_parser import (
    clean_json_string,
    extract_json_from_text,
    parse_json_value,
    parse_tags_json,
)

__all__ = [
    "extract_json_from_text",
    "clean_json_string",
    "parse_json_value",
    "parse_tags_json",
]
