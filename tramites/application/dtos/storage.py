"""DTO returned by storage backends after an upload."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    """Locator of an uploaded blob. key is what delete() expects."""

    key: str
    url: str
    checksum: str
    size: int
