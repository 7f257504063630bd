"""Shared utilities: datetime, generators, sanitization."""

from tramites.shared.utils.datetime import ensure_utc, utc_now, whole_days_between
from tramites.shared.utils.generators import generate_cuid
from tramites.shared.utils.sanitization import InputSanitizer, sanitize_text

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "whole_days_between",
    "InputSanitizer",
    "sanitize_text",
]
