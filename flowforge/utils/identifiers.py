"""ID generation and timestamp utilities."""

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone


def generate_diagram_id() -> str:
    """Generate a unique diagram ID (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


class IdSequence:
    """Hands out `<prefix>_<n>` ids, skipping any already taken.

    One sequence belongs to one call context (a repair run, an editing
    session), so concurrent pipelines never share a counter and tests can
    predict every id.
    """

    def __init__(self, prefix: str, start: int = 1, taken: Iterable[str] = ()) -> None:
        self.prefix = prefix
        self._next = start
        self._taken: set[str] = {value for value in taken if value}

    def reserve(self, ids: Iterable[str | None]) -> None:
        """Mark ids as used so the sequence never returns them."""
        self._taken.update(value for value in ids if value)

    def next_id(self) -> str:
        while True:
            candidate = f"{self.prefix}_{self._next}"
            self._next += 1
            if candidate not in self._taken:
                self._taken.add(candidate)
                return candidate

    def __call__(self) -> str:
        return self.next_id()

    def __repr__(self) -> str:
        return f"IdSequence(prefix={self.prefix!r}, next={self._next})"
