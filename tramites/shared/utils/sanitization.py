"""Input sanitization for free text and uploaded file names."""

import os
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Strip markup from user-supplied text before it is persisted.

    Subjects, observations and instructions are shown back to staff and to
    the public tracking page, so no HTML survives.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    _WHITESPACE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")
    _RESERVED_NAMES: ClassVar[frozenset[str]] = frozenset(
        {"con", "prn", "aux", "nul"}
        | {f"com{i}" for i in range(1, 10)}
        | {f"lpt{i}" for i in range(1, 10)}
    )

    @classmethod
    def clean_text(cls, value: str | None) -> str | None:
        """Remove all HTML and collapse runs of whitespace. None stays None."""
        if value is None:
            return None
        cleaned = nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})
        return cls._WHITESPACE.sub(" ", cleaned).strip()

    @classmethod
    def clean_filename(cls, filename: str) -> str:
        """Return the basename without NUL bytes or leading/trailing dots.

        Raises:
            ValueError: If nothing usable remains or the name is reserved.
        """
        name = os.path.basename(filename.replace("\\", "/"))
        name = name.replace("\x00", "").strip(". ")
        if not name:
            raise ValueError("Filename is empty or invalid after sanitization")
        stem = name.split(".", 1)[0].lower()
        if stem in cls._RESERVED_NAMES:
            raise ValueError(f"Reserved filename: {name}")
        return name


def sanitize_text(value: str | None) -> str | None:
    """Module-level shortcut for InputSanitizer.clean_text."""
    return InputSanitizer.clean_text(value)
