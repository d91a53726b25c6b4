"""Parse REBASE restriction enzyme data dumps (format #31, "withrefm").

Each enzyme record is a run of tagged lines ``<1>`` to ``<8>``: name,
isoschizomers, recognition sequence, methylation site, microorganism,
source, commercial availability and references. A header section lists the
one-letter codes of commercial suppliers, which are resolved to supplier
names while parsing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

__all__ = ["Enzyme", "parse", "read", "export"]

_COMMERCIAL_HEADER = "REBASE codes for commercial sources of enzymes"
_COMMERCIAL_SKIP_LINES = 3
_SUPPLIER_NAME_OFFSET = 9

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Enzyme:
    """A single restriction enzyme from REBASE."""

    name: str = ""
    isoschizomers: list[str] = field(default_factory=list)
    recognition_sequence: str = ""
    methylation_site: str = ""
    microorganism: str = ""
    source: str = ""
    commercial_availability: list[str] = field(default_factory=list)
    references: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; lists never filled in become None."""
        return {
            "name": self.name,
            "isoschizomers": list(self.isoschizomers) or None,
            "recognitionSequence": self.recognition_sequence,
            "methylationSite": self.methylation_site,
            "microorganism": self.microorganism,
            "source": self.source,
            "commercialAvailability": list(self.commercial_availability) or None,
            "references": self.references,
        }


def _apply_tag(enzyme: Enzyme, line: str, suppliers: dict[str, str]) -> bool:
    """Fill in the field a tagged line holds; return True when references start."""
    value = line[3:]
    if "<1>" in line:
        enzyme.name = value
    elif "<2>" in line:
        enzyme.isoschizomers = value.split(",")
    elif "<3>" in line:
        enzyme.recognition_sequence = value
    elif "<4>" in line:
        enzyme.methylation_site = value
    elif "<5>" in line:
        enzyme.microorganism = value
    elif "<6>" in line:
        enzyme.source = value
    elif "<7>" in line:
        enzyme.commercial_availability = [suppliers.get(code, "") for code in value]
    elif "<8>" in line:
        enzyme.references = value
        return True
    return False


def parse(file: IO[str] | IO[bytes]) -> dict[str, Enzyme]:
    """Parse a REBASE dump from a text or binary stream into enzymes keyed by name.

    An enzyme is stored once the next enzyme record begins.
    """
    data = file.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")

    enzymes: dict[str, Enzyme] = {}
    suppliers: dict[str, str] = {}
    enzyme = Enzyme()

    commercial_line = 0
    in_commercial = False
    in_references = False
    for line in data.split("\n"):
        if line == _COMMERCIAL_HEADER:
            in_commercial = True

        if in_commercial:
            if "<1>" in line:
                commercial_line = 0
                in_commercial = False
            commercial_line += 1
            trimmed = line.lstrip("\t")
            if commercial_line > _COMMERCIAL_SKIP_LINES and trimmed:
                suppliers[trimmed[0]] = trimmed[_SUPPLIER_NAME_OFFSET:]

        if in_references and line:
            if "<1>" in line:
                enzymes[enzyme.name] = enzyme
                enzyme = Enzyme()
                in_references = False
            enzyme.references += "\n" + line

        if _apply_tag(enzyme, line, suppliers):
            in_references = True
    return enzymes


def read(path: str | Path) -> dict[str, Enzyme]:
    """Read a REBASE dump file."""
    with open(path, "rb") as handle:
        return parse(handle)


def export(enzyme_map: dict[str, Enzyme]) -> bytes:
    """Serialise enzymes to compact JSON with keys in sorted order."""
    payload = {name: enzyme_map[name].to_dict() for name in sorted(enzyme_map)}
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    for raw, escaped in _JSON_ESCAPES.items():
        text = text.replace(raw, escaped)
    return text.encode("utf-8")