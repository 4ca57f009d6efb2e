"""Rank project items by their position in the Status field's options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ..models import SENTINEL_RANK, StatusField, StatusOption


class StatusOrderIndex:
    """Case-insensitive mapping from status name to its display position.

    Build one per project each time the Status field is fetched. When two
    options share a name (ignoring case) the later one wins.
    """

    def __init__(self, ranks: Mapping[str, int] | None = None) -> None:
        self._ranks: dict[str, int] = dict(ranks or {})

    @classmethod
    def from_options(cls, options: Iterable[StatusOption]) -> StatusOrderIndex:
        return cls({option.name.lower(): idx for idx, option in enumerate(options)})

    @classmethod
    def from_status_field(cls, status_field: StatusField | None) -> StatusOrderIndex:
        """Build the index from a Status field; no field gives an empty index."""
        if status_field is None:
            return cls()
        return cls.from_options(status_field.options)

    def rank(self, status: str | None) -> int:
        """Position of ``status``, or SENTINEL_RANK when absent or unknown."""
        if not status:
            return SENTINEL_RANK
        return self._ranks.get(status.lower(), SENTINEL_RANK)

    def __contains__(self, status: object) -> bool:
        return isinstance(status, str) and status.lower() in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)

    def as_dict(self) -> dict[str, int]:
        return dict(self._ranks)
