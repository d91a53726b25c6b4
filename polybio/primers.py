"""Primer melting temperatures and De Bruijn based DNA barcodes.

Primers are short single stranded DNA fragments that bind a template and mark
where a polymerase starts copying. This module estimates their melting
temperature and builds sets of barcodes that share no long substring.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import NamedTuple

__all__ = [
    "reverse_complement",
    "gc_content",
    "santa_lucia",
    "marmur_doty",
    "melting_temp",
    "nucleobase_de_bruijn_sequence",
    "create_barcodes_with_banned_sequences",
    "create_barcodes",
    "create_barcodes_gc_range",
]

_COMPLEMENTS = str.maketrans(
    "ACGTUBVDHKMRYSWNXacgtubvdhkmryswnx",
    "TGCAAVBHDMKYRSWNXtgcaavbhdmkyrswnx",
)


def reverse_complement(sequence: str) -> str:
    """Return the reverse complement of a nucleotide sequence, IUPAC aware."""
    return sequence.translate(_COMPLEMENTS)[::-1]


def gc_content(sequence: str) -> float:
    """Return the fraction of G and C bases in a sequence."""
    if not sequence:
        raise ValueError("cannot compute GC content of an empty sequence")
    upper = sequence.upper()
    return (upper.count("G") + upper.count("C")) / len(upper)


class _Thermodynamics(NamedTuple):
    h: float  # enthalpy, kcal/mol
    s: float  # entropy, cal/mol-K


_NEAREST_NEIGHBORS = {
    "AA": _Thermodynamics(-7.6, -21.3),
    "TT": _Thermodynamics(-7.6, -21.3),
    "AT": _Thermodynamics(-7.2, -20.4),
    "TA": _Thermodynamics(-7.2, -21.3),
    "CA": _Thermodynamics(-8.5, -22.7),
    "TG": _Thermodynamics(-8.5, -22.7),
    "GT": _Thermodynamics(-8.4, -22.4),
    "AC": _Thermodynamics(-8.4, -22.4),
    "CT": _Thermodynamics(-7.8, -21.0),
    "AG": _Thermodynamics(-7.8, -21.0),
    "GA": _Thermodynamics(-8.2, -22.2),
    "TC": _Thermodynamics(-8.2, -22.2),
    "CG": _Thermodynamics(-10.6, -27.2),
    "GC": _Thermodynamics(-9.8, -24.4),
    "GG": _Thermodynamics(-8.0, -19.9),
    "CC": _Thermodynamics(-8.0, -19.9),
}
_NO_EFFECT = _Thermodynamics(0.0, 0.0)

_INITIAL_PENALTY = _Thermodynamics(0.2, -5.7)
_SYMMETRY_PENALTY = _Thermodynamics(0.0, -1.4)
_TERMINAL_AT_PENALTY = _Thermodynamics(2.2, 6.9)

_GAS_CONSTANT = 1.9872  # cal / mol - K


def santa_lucia(
    sequence: str,
    primer_concentration: float,
    salt_concentration: float,
    magnesium_concentration: float,
) -> tuple[float, float, float]:
    """Nearest-neighbour melting point of a 15-200 bp sequence.

    Returns ``(melting_temp, dH, dS)``.
    """
    if not sequence:
        raise ValueError("sequence must not be empty")
    sequence = sequence.upper()

    dh = _INITIAL_PENALTY.h
    ds = _INITIAL_PENALTY.s

    if sequence == reverse_complement(sequence):
        dh += _SYMMETRY_PENALTY.h
        ds += _SYMMETRY_PENALTY.s
        symmetry_factor = 1.0
    else:
        symmetry_factor = 4.0

    if sequence[-1] in "AT":
        dh += _TERMINAL_AT_PENALTY.h
        ds += _TERMINAL_AT_PENALTY.s

    salt_effect = salt_concentration + magnesium_concentration * 140
    ds += 0.368 * (len(sequence) - 1) * math.log(salt_effect)

    for first, second in zip(sequence, sequence[1:]):
        neighbor = _NEAREST_NEIGHBORS.get(first + second, _NO_EFFECT)
        dh += neighbor.h
        ds += neighbor.s

    melting = dh * 1000 / (ds + _GAS_CONSTANT * math.log(primer_concentration / symmetry_factor)) - 273.15
    return melting, dh, ds


def marmur_doty(sequence: str) -> float:
    """Melting point of a very short (<15 bp) sequence by the modified Marmur-Doty formula."""
    upper = sequence.upper()
    weak = upper.count("A") + upper.count("T")
    strong = upper.count("C") + upper.count("G")
    return 2.0 * weak + 4.0 * strong - 7.0


def melting_temp(sequence: str) -> float:
    """SantaLucia melting point with 500 nM primer, 50 mM sodium and no magnesium."""
    temperature, _, _ = santa_lucia(sequence, 500e-9, 50e-3, 0.0)
    return temperature


_ALPHABET = "ATGC"


def nucleobase_de_bruijn_sequence(substring_length: int) -> str:
    """Return a De Bruijn sequence over ATGC in which every k-mer occurs exactly once."""
    if substring_length < 1:
        raise ValueError("substring_length must be at least 1")
    size = len(_ALPHABET)
    digits = [0] * (substring_length + 1)
    sequence: list[int] = []

    def construct(t: int, p: int) -> None:
        if t > substring_length:
            if substring_length % p == 0:
                sequence.extend(digits[1 : p + 1])
            return
        digits[t] = digits[t - p]
        construct(t + 1, p)
        for value in range(digits[t - p] + 1, size):
            digits[t] = value
            construct(t + 1, t)

    construct(1, 1)
    cyclic = "".join(_ALPHABET[digit] for digit in sequence)
    return cyclic + cyclic[: substring_length - 1]


def create_barcodes_with_banned_sequences(
    length: int,
    max_sub_sequence: int,
    banned_sequences: Iterable[str] = (),
    banned_functions: Iterable[Callable[[str], bool]] = (),
) -> list[str]:
    """Cut barcodes from a De Bruijn sequence, skipping banned content.

    A barcode is shifted forward while it contains a banned sequence or its
    reverse complement, or while any of ``banned_functions`` returns False for
    it. Barcodes never share a substring of ``max_sub_sequence`` bases.
    """
    step = length - (max_sub_sequence - 1)
    if step <= 0:
        raise ValueError("length must be at least max_sub_sequence")
    banned_sequences = list(banned_sequences)
    banned_functions = list(banned_functions)

    debruijn = nucleobase_de_bruijn_sequence(max_sub_sequence)
    total = len(debruijn)
    barcodes: list[str] = []
    barcode_num = 0
    while barcode_num * step + length < total:
        start = barcode_num * step
        end = start + length
        barcode_num += 1
        for banned in banned_sequences:
            for target in (banned, reverse_complement(banned)):
                while target in debruijn[start:end]:
                    if end + 1 > total:
                        return barcodes
                    start += 1
                    end += 1
                    barcode_num += 1
        for accept in banned_functions:
            while not accept(debruijn[start:end]):
                if end + 1 > total:
                    return barcodes
                start += 1
                end += 1
                barcode_num += 1
        barcodes.append(debruijn[start:end])
    return barcodes


def create_barcodes(length: int, max_sub_sequence: int) -> list[str]:
    """Create barcodes with no banned sequences or filters."""
    return create_barcodes_with_banned_sequences(length, max_sub_sequence, (), ())


def create_barcodes_gc_range(
    length: int,
    max_sub_sequence: int,
    min_gc_content: float,
    max_gc_content: float,
) -> list[str]:
    """Create barcodes whose GC content lies within the given inclusive range."""

    def within_range(barcode: str) -> bool:
        return min_gc_content <= gc_content(barcode) <= max_gc_content

    return create_barcodes_with_banned_sequences(length, max_sub_sequence, (), (within_range,))