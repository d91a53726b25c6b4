"""Read and write GFF3 files.

GFF ("general feature format") stores the features of a genomic sequence,
optionally followed by the sequence itself in FASTA form.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from polybio.primers import reverse_complement

__all__ = ["Location", "Feature", "Meta", "Gff", "parse", "build", "read", "write"]

_INTEGER = re.compile(r"[+-]?[0-9]+")
_LINE_WIDTH = 70


def _atoi(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


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
    """A single feature line of a GFF file."""

    name: str = ""
    source: str = ""
    type: str = ""
    score: str = ""
    strand: str = ""
    phase: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    location: Location = field(default_factory=Location)
    parent_sequence: Gff | None = field(default=None, compare=False, repr=False)

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
    """Header information of a GFF file.

    ``checksum`` is a 32 byte BLAKE2b digest of the parsed file, useful to
    tell whether two incoming files differ.
    """

    name: str = ""
    description: str = ""
    version: str = ""
    region_start: int = 0
    region_end: int = 0
    size: int = 0
    sequence_hash: str = ""
    sequence_hash_function: str = ""
    checksum: bytes = bytes(32)


@dataclass
class Gff:
    """An annotated sequence read from or written to GFF."""

    meta: Meta = field(default_factory=Meta)
    features: list[Feature] = field(default_factory=list)
    sequence: str = ""

    def add_feature(self, feature: Feature) -> None:
        """Attach a feature to this sequence."""
        feature.parent_sequence = self
        self.features.append(feature)


def _parse_feature(line: str) -> Feature:
    fields = line.split("\t")
    if len(fields) < 9:
        raise ValueError(f"GFF feature line needs 9 tab separated fields: {line!r}")
    attributes: dict[str, str] = {}
    for attribute in fields[8].split(";"):
        parts = attribute.split("=")
        if len(parts) < 2:
            raise ValueError(f"malformed GFF attribute: {attribute!r}")
        attributes[parts[0]] = parts[1]
    # GFF counts from 1; locations count from 0.
    location = Location(start=_atoi(fields[3]) - 1, end=_atoi(fields[4]))
    return Feature(
        name=fields[0],
        source=fields[1],
        type=fields[2],
        score=fields[5],
        strand=fields[6],
        phase=fields[7],
        attributes=attributes,
        location=location,
    )


def parse(file: IO[str] | IO[bytes]) -> Gff:
    """Parse a GFF3 document from a text or binary stream."""
    data = file.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    lines = data.decode("utf-8").split("\n")
    if len(lines) < 2:
        raise ValueError("GFF file needs a version line and a sequence-region line")
    version_fields = lines[0].split(" ")
    region_fields = lines[1].split(" ")
    if len(version_fields) < 2 or len(region_fields) < 4:
        raise ValueError("malformed GFF header")

    region_start = _atoi(region_fields[2])
    region_end = _atoi(region_fields[3])
    meta = Meta(
        name=region_fields[1],
        version=version_fields[1],
        region_start=region_start,
        region_end=region_end,
        size=region_end - region_start,
        checksum=hashlib.blake2b(data, digest_size=32).digest(),
    )
    gff = Gff(meta=meta)

    sequence_parts: list[str] = []
    in_fasta = False
    for line in lines:
        if line == "##FASTA":
            in_fasta = True
        elif not line or line.startswith("##"):
            continue
        elif in_fasta:
            if line.startswith(">"):
                meta.description = line
            else:
                sequence_parts.append(line)
        else:
            gff.add_feature(_parse_feature(line))
    gff.sequence = "".join(sequence_parts)
    return gff


def _wrap(sequence: str, region_end: int) -> str:
    pieces: list[str] = []
    previous = 0
    for stop in range(_LINE_WIDTH, len(sequence) + 1, _LINE_WIDTH):
        if stop != region_end:
            pieces.append(sequence[previous:stop] + "\n")
            previous = stop
    pieces.append(sequence[previous:])
    return "".join(pieces)


def build(sequence: Gff) -> bytes:
    """Render a sequence as GFF3 text."""
    meta = sequence.meta
    version_line = f"##gff-version {meta.version}\n" if meta.version else "##gff-version 3 \n"
    name = meta.name or "Sequence"
    start = str(meta.region_start) if meta.region_start != 0 else "1"
    lines = [version_line, f"##sequence-region {name} {start} {meta.region_end}\n"]

    for feature in sequence.features:
        attributes = ";".join(f"{key}={feature.attributes[key]}" for key in sorted(feature.attributes))
        columns = [
            feature.name,
            feature.source or "feature",
            feature.type or "unknown",
            str(feature.location.start + 1),
            str(feature.location.end),
            feature.score,
            feature.strand,
            feature.phase,
            attributes,
        ]
        lines.append("\t".join(columns) + "\n")

    lines.extend(["###\n", "##FASTA\n", f">{meta.name}\n", _wrap(sequence.sequence, meta.region_end), "\n"])
    return "".join(lines).encode("utf-8")


def read(path: str | Path) -> Gff:
    """Read a GFF3 file."""
    with open(path, "rb") as handle:
        return parse(handle)


def write(sequence: Gff, path: str | Path) -> None:
    """Write a sequence to ``path`` as GFF3."""
    Path(path).write_bytes(build(sequence))