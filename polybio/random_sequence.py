"""Seeded random DNA and protein sequences."""

from __future__ import annotations

import random

__all__ = ["protein_sequence", "dna_sequence"]

_AMINO_ACIDS = "ACDEFGHIJLMNPQRSTVWY"
_NUCLEOTIDES = "ACTG"


def protein_sequence(length: int, seed: int) -> str:
    """Return a random protein of ``length`` residues starting with M and ending with *."""
    if length <= 2:
        raise ValueError(
            "length must be greater than two: a random protein always holds "
            "a start and a stop codon"
        )
    rng = random.Random(seed)
    body = "".join(rng.choice(_AMINO_ACIDS) for _ in range(length - 2))
    return f"M{body}*"


def dna_sequence(length: int, seed: int) -> str:
    """Return a random DNA sequence of ``length`` bases."""
    if length < 0:
        raise ValueError("length must not be negative")
    rng = random.Random(seed)
    return "".join(rng.choice(_NUCLEOTIDES) for _ in range(length))