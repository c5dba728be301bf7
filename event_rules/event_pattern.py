"""Event pattern definition for EventBridge rules."""

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class EventPattern:
    """
    Filter describing which events a rule matches.

    Each field lists the accepted values for the matching event field;
    ``detail`` holds a nested pattern over the event payload. Fields left
    as None do not constrain the match.
    """

    version: list[str] | None = None
    id: list[str] | None = None
    detail_type: list[str] | None = None
    source: list[str] | None = None
    account: list[str] | None = None
    time: list[str] | None = None
    region: list[str] | None = None
    resources: list[str] | None = None
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the fields that are set, keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
