"""Read and write annotated sequences in a simple native JSON format."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import IO, Any

from polybio.primers import reverse_complement

__all__ = ["Location", "Feature", "Meta", "Poly", "parse", "read", "write"]

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TIME_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    stamp, offset = text[:19], text[19:]
    fraction = f".{value.microsecond:06d}".rstrip("0") if value.microsecond else ""
    if value.utcoffset() == timedelta(0):
        offset = "Z"
    return stamp + fraction + offset


def _parse_time(text: str) -> datetime:
    match = _TIME_PATTERN.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    stamp, fraction, offset = match.groups()
    if offset == "Z":
        offset = "+00:00"
    moment = datetime.fromisoformat(stamp + offset)
    if fraction:
        moment = moment.replace(microsecond=int((fraction + "000000")[:6]))
    return moment


@dataclass
class Location:
    """Where a feature lies on its parent sequence, zero based and end exclusive."""

    start: int = 0
    end: int = 0
    complement: bool = False
    join: bool = False
    five_prime_partial: bool = False
    three_prime_partial: bool = False
    sub_locations: list[Location] = field(default_factory=list)


@dataclass
class Feature:
    """An annotation on a sequence."""

    name: str = ""
    hash: str = ""
    type: str = ""
    description: str = ""
    location: Location = field(default_factory=Location)
    tags: dict[str, str] = field(default_factory=dict)
    sequence: str = ""
    parent_sequence: Poly | None = field(default=None, compare=False, repr=False)

    def get_sequence(self) -> str:
        """Return the feature's sequence cut from its parent sequence."""
        if self.parent_sequence is None:
            raise ValueError("feature is not attached to a sequence")
        return _location_sequence(self.parent_sequence.sequence, self.location)


def _location_sequence(parent: str, location: Location) -> str:
    if location.sub_locations:
        joined = "".join(_location_sequence(parent, sub) for sub in location.sub_locations)
    else:
        if not 0 <= location.start <= location.end <= len(parent):
            raise ValueError(
                f"location {location.start}:{location.end} lies outside a sequence "
                f"of length {len(parent)}"
            )
        joined = parent[location.start : location.end]
    return reverse_complement(joined) if location.complement else joined


@dataclass
class Meta:
    """Metadata about a sequence."""

    name: str = ""
    hash: str = ""
    description: str = ""
    url: str = ""
    created_by: str = ""
    created_with: str = ""
    created_on: datetime = _ZERO_TIME
    schema: str = ""


@dataclass
class Poly:
    """An annotated sequence."""

    meta: Meta = field(default_factory=Meta)
    features: list[Feature] = field(default_factory=list)
    sequence: str = ""

    def add_feature(self, feature: Feature) -> None:
        """Attach a feature to this sequence."""
        feature.parent_sequence = self
        self.features.append(feature)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation as plain Python data."""
        return {
            "meta": {
                "name": self.meta.name,
                "hash": self.meta.hash,
                "description": self.meta.description,
                "url": self.meta.url,
                "created_by": self.meta.created_by,
                "created_with": self.meta.created_with,
                "created_on": _format_time(self.meta.created_on),
                "schema": self.meta.schema,
            },
            "features": [_feature_to_dict(feature) for feature in self.features],
            "sequence": self.sequence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Poly:
        """Build a sequence from JSON data, attaching every feature to it."""
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        meta_data = data.get("meta") or {}
        created_on = meta_data.get("created_on")
        meta = Meta(
            name=meta_data.get("name", ""),
            hash=meta_data.get("hash", ""),
            description=meta_data.get("description", ""),
            url=meta_data.get("url", ""),
            created_by=meta_data.get("created_by", ""),
            created_with=meta_data.get("created_with", ""),
            created_on=_parse_time(created_on) if created_on else _ZERO_TIME,
            schema=meta_data.get("schema", ""),
        )
        poly = cls(meta=meta, sequence=data.get("sequence", ""))
        for feature_data in data.get("features") or []:
            poly.add_feature(_feature_from_dict(feature_data))
        return poly


def _location_to_dict(location: Location) -> dict[str, Any]:
    return {
        "start": location.start,
        "end": location.end,
        "complement": location.complement,
        "join": location.join,
        "five_prime_partial": location.five_prime_partial,
        "three_prime_partial": location.three_prime_partial,
        "sub_locations": [_location_to_dict(sub) for sub in location.sub_locations],
    }


def _location_from_dict(data: dict[str, Any]) -> Location:
    return Location(
        start=data.get("start", 0),
        end=data.get("end", 0),
        complement=data.get("complement", False),
        join=data.get("join", False),
        five_prime_partial=data.get("five_prime_partial", False),
        three_prime_partial=data.get("three_prime_partial", False),
        sub_locations=[_location_from_dict(sub) for sub in data.get("sub_locations") or []],
    )


def _feature_to_dict(feature: Feature) -> dict[str, Any]:
    return {
        "name": feature.name,
        "hash": feature.hash,
        "type": feature.type,
        "description": feature.description,
        "location": _location_to_dict(feature.location),
        "tags": dict(feature.tags),
        "sequence": feature.sequence,
    }


def _feature_from_dict(data: dict[str, Any]) -> Feature:
    return Feature(
        name=data.get("name", ""),
        hash=data.get("hash", ""),
        type=data.get("type", ""),
        description=data.get("description", ""),
        location=_location_from_dict(data.get("location") or {}),
        tags=dict(data.get("tags") or {}),
        sequence=data.get("sequence", ""),
    )


def parse(file: IO[str] | IO[bytes]) -> Poly:
    """Parse a JSON document from a text or binary stream."""
    return Poly.from_dict(json.loads(file.read()))


def read(path: str | Path) -> Poly:
    """Read a JSON sequence file."""
    with open(path, "rb") as handle:
        return parse(handle)


def write(sequence: Poly, path: str | Path) -> None:
    """Write a sequence to ``path`` as indented JSON."""
    text = json.dumps(sequence.to_dict(), indent=1, ensure_ascii=False)
    Path(path).write_text(text, encoding="utf-8")