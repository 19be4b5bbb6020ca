"""
Pydantic models used across the backend.

Activities are open records: clients may send any fields they like and
get them back untouched, values and types included. The models below name
the handful of fields the server reads or writes, without constraining
their types, and keep everything else in pydantic's extra-field
storage (`model_extra`), so merging and serialization stay explicit.

Guidelines:
- Wire names are camelCase (`isSynced`, `createdAt`); Python attributes
  are snake_case. Always dump with `by_alias=True`.
- Dump with `exclude_unset=True` so a record never grows keys that were
  neither sent by the client nor stamped by the server.
- Only wire names bind to fields: a client key such as `created_at` is
  an ordinary extra and round-trips as sent.
"""

from pydantic import BaseModel, ConfigDict, PrivateAttr, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional
from datetime import datetime, timezone


_DATETIME = TypeAdapter(datetime)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a `Z` suffix."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a client timestamp into an aware datetime, or None.

    Accepts ISO-8601 strings and numeric epoch values (seconds or
    milliseconds, as pydantic infers them). Naive values are taken as UTC.
    """

    if value is None or value == "":
        return None
    try:
        parsed = _DATETIME.validate_python(value)
    except ValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ActivityIn(BaseModel):
    """Input shape for create and update requests.

    Every field is optional; unknown fields are kept as extras.
    """

    model_config = ConfigDict(extra="allow", alias_generator=to_camel)

    id: Optional[Any] = None
    description: Optional[Any] = None
    location: Optional[Any] = None
    timestamp: Optional[Any] = None
    is_synced: Optional[Any] = None
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None

    def to_fields(self) -> Dict[str, Any]:
        """The fields the client actually sent, keyed by wire name."""

        return self.model_dump(by_alias=True, exclude_unset=True)


class Activity(ActivityIn):
    """A stored activity.

    `sort_ts` is derived from `timestamp` once, when the record is built,
    and is what listing sorts on.
    """

    id: Any

    _sort_ts: Optional[datetime] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._sort_ts = parse_timestamp(self.timestamp)

    @property
    def sort_ts(self) -> Optional[datetime]:
        return self._sort_ts

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on address or description."""

        needle = query.lower()
        address = self.location.get("address") if isinstance(self.location, dict) else None
        return any(
            isinstance(value, str) and needle in value.lower()
            for value in (address, self.description)
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
