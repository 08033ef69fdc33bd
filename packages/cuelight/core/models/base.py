"""Base model for wire-compatible domain records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CueLightModel(BaseModel):
    """Base class for domain records exchanged with the backend.

    Field names are snake_case in Python and camelCase on the wire. Both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Backend payloads carry fields we do not model
    )

    def to_wire(self, **kwargs: Any) -> dict[str, Any]:
        """Dump to a camelCase JSON-compatible dict."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class _Unset:
    """Marker for "argument not supplied" where None is a meaningful value."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()
