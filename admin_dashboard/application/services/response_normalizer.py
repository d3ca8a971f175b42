"""Response normalizer — decodes the backend's collection envelopes.

The marketplace backend is inconsistent across endpoints and versions; a
collection may arrive as a bare array, as ``{data: [...]}``, as
``{<plural>: [...]}`` or as a single object. This module is the one place
that decides what counts as a malformed response.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from admin_dashboard.domain.entities import Record
from admin_dashboard.domain.exceptions import ResponseFormatError

logger = logging.getLogger(__name__)

KNOWN_PLURALS = (
    "buyers",
    "products",
    "sellers",
    "subcategories",
    "orders",
    "categories",
    "sliders",
)


class EnvelopeShape(str, Enum):
    """Which envelope a payload matched."""

    ARRAY = "array"
    DATA = "data"
    NAMED = "named"
    SINGLE = "single"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class NormalizedCollection:
    records: list[Record] = field(default_factory=list)
    shape: EnvelopeShape = EnvelopeShape.ARRAY
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def records_or_raise(self) -> list[Record]:
        if self.error is not None:
            raise ResponseFormatError(self.error)
        return self.records


def normalize_collection(payload: Any, plural: str | None = None) -> NormalizedCollection:
    """Coerce any backend payload into a flat list of records. Never raises.

    Cases, in order:
        (a) payload is an array
        (b) ``payload["data"]`` is an array
        (c) ``payload[<plural>]`` is an array (the resource's own plural first,
            then every known plural; also looked up under ``data``)
        (d) payload is a single object → one-element list
        (e) anything else → empty list plus a format error
    """
    if isinstance(payload, list):
        return NormalizedCollection(_only_records(payload), EnvelopeShape.ARRAY)

    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return NormalizedCollection(_only_records(data), EnvelopeShape.DATA)

        for container in (payload, data):
            if not isinstance(container, dict):
                continue
            for key in _plural_candidates(plural):
                value = container.get(key)
                if isinstance(value, list):
                    return NormalizedCollection(_only_records(value), EnvelopeShape.NAMED)

        return NormalizedCollection([payload], EnvelopeShape.SINGLE)

    label = plural or "records"
    logger.warning("Unrecognized %s payload of type %s", label, type(payload).__name__)
    return NormalizedCollection(
        [],
        EnvelopeShape.UNRECOGNIZED,
        error=f"Invalid {label} data format received from server",
    )


def flatten_nested(item: Record, root: str, sections: tuple[str, ...]) -> Record:
    """``{<root>: {...}, <section>: {...}}`` to the root record with each section kept as a sub-dict.

    Flat items pass through unchanged, so list rows and detail bodies end up in one shape.
    """
    nested = item.get(root)
    if not isinstance(nested, dict):
        return dict(item)
    record = dict(nested)
    for section in sections:
        record[section] = _as_dict(item.get(section)) or _as_dict(nested.get(section))
    return record


def unwrap_record(payload: Any, singular: str | None = None) -> Record | None:
    """Unwrap a detail response: ``{data: {...}}``, ``{<singular>: {...}}`` or the object itself."""
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict):
        return data
    if singular and isinstance(payload.get(singular), dict):
        return payload[singular]
    return payload


def _as_dict(value: Any) -> Record:
    return value if isinstance(value, dict) else {}


def _plural_candidates(plural: str | None) -> list[str]:
    if plural is None:
        return list(KNOWN_PLURALS)
    return [plural] + [p for p in KNOWN_PLURALS if p != plural]


def _only_records(items: list[Any]) -> list[Record]:
    records = [item for item in items if isinstance(item, dict)]
    if len(records) != len(items):
        logger.debug("Dropped %d non-object entries", len(items) - len(records))
    return records
