"""Map raw feed records onto the canonical ``Listing`` shape.

Feed parsers hand over xml2js-style mappings: every child element is a list of
values, XML attributes live under ``"$"`` and element text that sits next to
attributes lives under ``"_"``. Identity fields must be wrapped exactly once;
zero or several values is a shape error, never a silent pick-first.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Final

from listingsync.domain.errors import ShapeError
from listingsync.domain.model import Listing

ATTRIBUTES_KEY: Final[str] = "$"
TEXT_KEY: Final[str] = "_"
UNIQUE_ID_FIELD: Final[str] = "uniqueID"
AGENT_FIELD: Final[str] = "listingAgent"
AGENT_NAME_FIELD: Final[str] = "name"
STATUS_ATTRIBUTE: Final[str] = "status"
MOD_TIME_ATTRIBUTE: Final[str] = "modTime"

_MOD_TIME_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d-%H:%M:%S",
    "%Y%m%d%H%M%S",
    "%Y%m%d-%H%M%S",
)
_EXTRACTED_ATTRIBUTES: Final[frozenset[str]] = frozenset({STATUS_ATTRIBUTE, MOD_TIME_ATTRIBUTE})


def normalize_record(payload: Mapping[str, object]) -> Listing:
    """Return the ``Listing`` described by one raw feed record."""

    if not isinstance(payload, Mapping):
        raise ShapeError("record", f"expected a mapping, got {type(payload).__name__}")

    attrs = _xml_attributes(payload, "record")
    unique_id = _sole_text(payload, UNIQUE_ID_FIELD) or ""
    status = _attribute_text(attrs, STATUS_ATTRIBUTE) or ""
    mod_time = parse_mod_time(_attribute_text(attrs, MOD_TIME_ATTRIBUTE))

    return Listing(
        unique_id=unique_id,
        status=status,
        agent_name=_agent_name(payload),
        mod_time=mod_time,
        attributes=_passthrough_attributes(payload, attrs),
    )


def parse_mod_time(value: str | None) -> datetime | None:
    """Parse a feed ``modTime`` value into an aware UTC datetime."""

    if value is None or not value.strip():
        return None
    text = value.strip()
    parsed: datetime | None = None
    for fmt in _MOD_TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)  # noqa: DTZ007
            break
        except ValueError:
            continue
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ShapeError(MOD_TIME_ATTRIBUTE, f"unrecognised timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except (OverflowError, ValueError) as exc:
        raise ShapeError(MOD_TIME_ATTRIBUTE, f"timestamp out of range {value!r}") from exc


def unwrap(value: object) -> Any:
    """Recursively strip single-element wrapper sequences."""

    if isinstance(value, Mapping):
        return {str(key): unwrap(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        items = [unwrap(item) for item in value]
        return items[0] if len(items) == 1 else items
    return value


def _sole(container: Mapping[str, object], field: str) -> object | None:
    if field not in container:
        return None
    value = container[field]
    if not isinstance(value, list | tuple):
        raise ShapeError(field, f"expected a single-element sequence, got {type(value).__name__}")
    if len(value) != 1:
        raise ShapeError(field, f"expected exactly one element, found {len(value)}")
    return value[0]


def _text(value: object, field: str) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        text = value.get(TEXT_KEY, "")
        if isinstance(text, str):
            return text.strip()
    raise ShapeError(field, f"expected text content, got {type(value).__name__}")


def _sole_text(container: Mapping[str, object], field: str) -> str | None:
    value = _sole(container, field)
    if value is None:
        return None
    return _text(value, field)


def _xml_attributes(container: Mapping[str, object], field: str) -> Mapping[str, object]:
    attrs = container.get(ATTRIBUTES_KEY, {})
    if not isinstance(attrs, Mapping):
        raise ShapeError(field, "XML attributes must be a mapping")
    return attrs


def _attribute_text(attrs: Mapping[str, object], name: str) -> str | None:
    value = attrs.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ShapeError(name, f"expected an attribute string, got {type(value).__name__}")
    return value.strip()


def _agent_name(payload: Mapping[str, object]) -> str | None:
    agent = _sole(payload, AGENT_FIELD)
    if agent is None:
        return None
    if isinstance(agent, str):
        # <listingAgent/> without children
        if agent.strip():
            raise ShapeError(AGENT_FIELD, "expected nested agent details")
        return None
    if not isinstance(agent, Mapping):
        raise ShapeError(AGENT_FIELD, f"expected a mapping, got {type(agent).__name__}")
    name = _sole_text(agent, AGENT_NAME_FIELD)
    return name or None


def _passthrough_attributes(
    payload: Mapping[str, object],
    attrs: Mapping[str, object],
) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    remaining_attrs = {
        str(key): value for key, value in attrs.items() if key not in _EXTRACTED_ATTRIBUTES
    }
    if remaining_attrs:
        attributes[ATTRIBUTES_KEY] = remaining_attrs
    for key, value in payload.items():
        if key in (ATTRIBUTES_KEY, UNIQUE_ID_FIELD):
            continue
        attributes[str(key)] = unwrap(value)
    return attributes
