"""Stream entries out of UniProt XML data dumps.

Each protein in UniProt is an ``entry`` element. :func:`parse` reads entries
one at a time so that even very large dumps fit in memory; :func:`read` does
the same for a gzipped dump on disk.
"""

from __future__ import annotations

import gzip
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import IO, Any
from xml.etree import ElementTree

__all__ = ["Entry", "parse_int_list", "parse", "read"]

NAMESPACE = "http://uniprot.org/uniprot"
_GZIP_MAGIC = b"\x1f\x8b"


def _q(*tags: str) -> str:
    return "/".join(f"{{{NAMESPACE}}}{tag}" for tag in tags)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_int_list(text: str) -> list[int]:
    """Parse a whitespace separated list of integers such as an evidence attribute."""
    values = []
    for word in text.split():
        try:
            values.append(int(word))
        except ValueError:
            raise ValueError(f'invalid integer in list: "{word}"') from None
    return values


def _int_attr(element: ElementTree.Element | None, name: str) -> int:
    if element is None:
        return 0
    value = element.get(name)
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"invalid integer for attribute {name!r}: {value!r}") from None


def _date_attr(element: ElementTree.Element | None, name: str) -> date | None:
    if element is None:
        return None
    value = element.get(name)
    if value is None:
        return None
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def _evidence(element: ElementTree.Element) -> list[int]:
    return parse_int_list(element.get("evidence", ""))


def _texts(parent: ElementTree.Element | None, *path: str) -> list[str]:
    if parent is None:
        return []
    return [child.text or "" for child in parent.findall(_q(*path))]


def _db_reference(element: ElementTree.Element) -> dict[str, Any]:
    return {
        "type": element.get("type", ""),
        "id": element.get("id", ""),
        "properties": {prop.get("type", ""): prop.get("value", "") for prop in element.findall(_q("property"))},
        "evidence": _evidence(element),
    }


def _position(location: ElementTree.Element | None, tag: str) -> int | None:
    if location is None:
        return None
    element = location.find(_q(tag))
    if element is None or element.get("position") is None:
        return None
    return _int_attr(element, "position")


def _feature(element: ElementTree.Element) -> dict[str, Any]:
    location = element.find(_q("location"))
    return {
        "type": element.get("type", ""),
        "description": element.get("description", ""),
        "evidence": _evidence(element),
        "original": (element.findtext(_q("original")) or ""),
        "variation": _texts(element, "variation"),
        "begin": _position(location, "begin"),
        "end": _position(location, "end"),
        "position": _position(location, "position"),
    }


@dataclass
class Entry:
    """A single UniProt protein entry."""

    accession: list[str] = field(default_factory=list)
    name: list[str] = field(default_factory=list)
    recommended_name: str = ""
    alternative_names: list[str] = field(default_factory=list)
    gene_names: list[dict[str, Any]] = field(default_factory=list)
    organism_names: list[dict[str, str]] = field(default_factory=list)
    lineage: list[str] = field(default_factory=list)
    db_references: list[dict[str, Any]] = field(default_factory=list)
    comments: list[dict[str, Any]] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    features: list[dict[str, Any]] = field(default_factory=list)
    protein_existence: str = ""
    sequence: str = ""
    sequence_length: int = 0
    sequence_mass: int = 0
    sequence_checksum: str = ""
    sequence_modified: date | None = None
    sequence_version: int = 0
    dataset: str = ""
    created: date | None = None
    modified: date | None = None
    version: int = 0

    @classmethod
    def from_element(cls, element: ElementTree.Element) -> Entry:
        """Build an entry from a parsed ``entry`` XML element."""
        protein = element.find(_q("protein"))
        recommended = protein.find(_q("recommendedName", "fullName")) if protein is not None else None
        if recommended is not None:
            _evidence(recommended)

        gene_names = [
            {"value": name.text or "", "type": name.get("type", ""), "evidence": _evidence(name)}
            for name in element.findall(_q("gene", "name"))
        ]
        organism = element.find(_q("organism"))
        organism_names = [
            {"value": name.text or "", "type": name.get("type", "")}
            for name in (organism.findall(_q("name")) if organism is not None else [])
        ]
        comments = [
            {
                "type": comment.get("type", ""),
                "text": [text.text or "" for text in comment.findall(_q("text"))],
                "evidence": _evidence(comment),
            }
            for comment in element.findall(_q("comment"))
        ]
        existence = element.find(_q("proteinExistence"))
        sequence = element.find(_q("sequence"))

        return cls(
            accession=_texts(element, "accession"),
            name=_texts(element, "name"),
            recommended_name=(recommended.text or "") if recommended is not None else "",
            alternative_names=_texts(protein, "alternativeName", "fullName"),
            gene_names=gene_names,
            organism_names=organism_names,
            lineage=_texts(organism, "lineage", "taxon"),
            db_references=[_db_reference(ref) for ref in element.findall(_q("dbReference"))],
            comments=comments,
            keywords=_texts(element, "keyword"),
            features=[_feature(feature) for feature in element.findall(_q("feature"))],
            protein_existence=existence.get("type", "") if existence is not None else "",
            sequence=(sequence.text or "") if sequence is not None else "",
            sequence_length=_int_attr(sequence, "length"),
            sequence_mass=_int_attr(sequence, "mass"),
            sequence_checksum=sequence.get("checksum", "") if sequence is not None else "",
            sequence_modified=_date_attr(sequence, "modified"),
            sequence_version=_int_attr(sequence, "version"),
            dataset=element.get("dataset", ""),
            created=_date_attr(element, "created"),
            modified=_date_attr(element, "modified"),
            version=_int_attr(element, "version"),
        )


def parse(source: str | Path | IO[bytes]) -> Iterator[Entry]:
    """Yield every entry of an uncompressed UniProt XML document, one at a time."""
    root: ElementTree.Element | None = None
    for event, element in ElementTree.iterparse(source, events=("start", "end")):
        if event == "start":
            if root is None:
                root = element
            continue
        if _local_name(element.tag) == "entry":
            entry = Entry.from_element(element)
            if root is not None and root is not element:
                root.clear()
            yield entry


def _read_entries(handle: IO[bytes]) -> Iterator[Entry]:
    with handle, gzip.GzipFile(fileobj=handle) as stream:
        yield from parse(stream)


def read(path: str | Path) -> Iterator[Entry]:
    """Open a gzipped UniProt XML dump and return an iterator over its entries.

    Raises at once if the file is missing or is not gzip compressed.
    """
    handle = open(path, "rb")
    try:
        if handle.read(2) != _GZIP_MAGIC:
            raise gzip.BadGzipFile(f"{path} is not a gzip file")
        handle.seek(0)
    except BaseException:
        handle.close()
        raise
    return _read_entries(handle)