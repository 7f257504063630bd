"""Public tracking codes: EXP-<year>-XXXX-XXXX."""

import re
import secrets
from collections.abc import Callable
from datetime import datetime

from tramites.shared.utils.datetime import utc_now

# No 0/O or 1/I: codes are read aloud and typed from paper.
TRACKING_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
TRACKING_PREFIX = "EXP"
BODY_LENGTH = 8
GROUP_SIZE = 4

TRACKING_CODE_PATTERN = re.compile(
    rf"^{TRACKING_PREFIX}-\d{{4}}-[{TRACKING_ALPHABET}]{{{GROUP_SIZE}}}-[{TRACKING_ALPHABET}]{{{GROUP_SIZE}}}$"
)


class TrackingCodeGenerator:
    """Generate human-shareable tracking codes.

    Uniqueness is not guaranteed here; the document table's unique
    constraint is authoritative and callers regenerate on collision.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        choice: Callable[[str], str] = secrets.choice,
    ) -> None:
        self._clock = clock
        self._choice = choice

    def generate(self) -> str:
        """Return a new code for the current calendar year."""
        body = "".join(self._choice(TRACKING_ALPHABET) for _ in range(BODY_LENGTH))
        year = self._clock().year
        return f"{TRACKING_PREFIX}-{year}-{body[:GROUP_SIZE]}-{body[GROUP_SIZE:]}"

    __call__ = generate


def normalize_tracking_code(raw: str) -> str:
    """Uppercase and strip a code typed by a citizen."""
    return raw.strip().upper()


def is_valid_tracking_code(code: str) -> bool:
    """Return True if code has the EXP-<year>-XXXX-XXXX shape."""
    return bool(TRACKING_CODE_PATTERN.match(code))
