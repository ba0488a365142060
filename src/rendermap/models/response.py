"""Response context handed to page templates.

The field names are the ones templates (and the built-in debug partial)
refer to: Helper, String, Context.params, Context.keys, Params, Extra, Data
and Array.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


class Helper:
    """Values computed at render time."""

    @property
    def Now(self) -> str:  # noqa: N802
        return datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")


@dataclass
class RequestContext:
    """Request-scoped values.

    Attributes:
        params: Request context parameters, in order
        keys: Request context keys, in order
    """

    params: list[Any] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)


@dataclass
class ResponseContext:
    """Data a page is rendered against.

    Attributes:
        data: Backend response as an object
        array: Backend response as an array
        extra: Extra static data declared for the page
        params: Request parameters
        context: Request context
    """

    data: dict[str, Any] = field(default_factory=dict)
    array: list[Any] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    context: RequestContext = field(default_factory=RequestContext)

    def to_string(self) -> str:
        """Serialize the backend response for display."""
        payload = self.array if self.array and not self.data else self.data
        return json.dumps(payload, default=str, sort_keys=True)

    def as_dict(self) -> dict[str, Any]:
        """Convert to a template context.

        Keyed structures are exposed as ordered lists of "key: value" entries,
        so templates can iterate them.
        """
        return {
            "Helper": Helper(),
            "String": self.to_string(),
            "Context": {
                "params": list(self.context.params),
                "keys": list(self.context.keys),
            },
            "Params": _entries(self.params),
            "Extra": _entries(self.extra),
            "Data": _entries(self.data),
            "Array": list(self.array),
            # Raw values for page templates
            "data": self.data,
            "array": self.array,
            "extra": self.extra,
            "params": self.params,
        }


def _entries(mapping: dict[str, Any]) -> list[str]:
    return [f"{key}: {value}" for key, value in mapping.items()]
