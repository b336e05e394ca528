"""Errors raised by the blog data provider."""

from __future__ import annotations

from typing import Any


class NoSuchEntityError(LookupError):
    """The requested entity does not exist or is not publicly visible.

    Inactive entities and missing rows are deliberately indistinguishable.
    """

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id!r}")
