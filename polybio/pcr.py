"""Design primers and simulate simple PCR reactions.

Annealing is assumed to be perfect at the target temperature. The target
melting temperatures are meant for Taq polymerase. Use :func:`simulate` instead
of :func:`simulate_simple` to also detect concatemerization in multiplex
reactions.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Sequence
from itertools import pairwise

from polybio.primers import melting_temp, reverse_complement

__all__ = [
    "MINIMAL_PRIMER_LENGTH",
    "ConcatemerizationError",
    "design_primers_with_overhangs",
    "design_primers",
    "simulate_simple",
    "simulate",
]

MINIMAL_PRIMER_LENGTH = 15


class ConcatemerizationError(Exception):
    """Raised when the products of a PCR can amplify themselves.

    ``fragments`` holds the products of the first round of amplification.
    """

    def __init__(self, fragments: list[str]) -> None:
        super().__init__("Concatemerization detected in PCR.")
        self.fragments = fragments


def _grow_primer(sequence: str, target_tm: float, *, from_end: bool) -> str:
    def cut(length: int) -> str:
        if from_end:
            return reverse_complement(sequence[len(sequence) - length :])
        return sequence[:length]

    length = MINIMAL_PRIMER_LENGTH
    if length > len(sequence):
        raise ValueError(f"sequence must be at least {MINIMAL_PRIMER_LENGTH} bases long")
    primer = cut(length)
    while melting_temp(primer) < target_tm:
        length += 1
        if length > len(sequence):
            raise ValueError("sequence is too short to reach the target melting temperature")
        primer = cut(length)
    return primer


def design_primers_with_overhangs(
    sequence: str, forward_overhang: str, reverse_overhang: str, target_tm: float
) -> tuple[str, str]:
    """Design forward and reverse primers for ``sequence`` carrying the given overhangs."""
    sequence = sequence.upper()
    forward = _grow_primer(sequence, target_tm, from_end=False)
    reverse = _grow_primer(sequence, target_tm, from_end=True)
    return forward_overhang + forward, reverse_complement(reverse_overhang) + reverse


def design_primers(sequence: str, target_tm: float) -> tuple[str, str]:
    """Design forward and reverse primers for ``sequence`` without overhangs."""
    return design_primers_with_overhangs(sequence, "", "", target_tm)


def _minimal_binding_site(primer: str, target_tm: float) -> str | None:
    """Return the 3' part of the primer used to find binding sites, or None if rejected."""
    if len(primer) < MINIMAL_PRIMER_LENGTH:
        raise ValueError(f"primer {primer!r} is shorter than {MINIMAL_PRIMER_LENGTH} bases")
    minimal_length = 0
    index = MINIMAL_PRIMER_LENGTH
    while melting_temp(primer[-index:]) < target_tm:
        minimal_length = index
        if index == len(primer):
            break
        index += 1
    minimal = primer[len(primer) - minimal_length :]
    return None if minimal == primer else minimal


def _find_all(haystack: str, needle: str) -> list[int]:
    if not needle:
        return []
    positions = []
    position = haystack.find(needle)
    while position != -1:
        positions.append(position)
        position = haystack.find(needle, position + 1)
    return positions


def _fragments(
    sequence: str,
    forward_location: int,
    reverse_location: int,
    forward_primers: list[int],
    reverse_primers: list[int],
    minimal_primers: list[str | None],
    primers: list[str],
) -> Iterator[str]:
    amplified = sequence[forward_location:reverse_location]
    for forward_index in forward_primers:
        full_forward = primers[forward_index]
        minimal = minimal_primers[forward_index] or ""
        overhang = full_forward[: len(full_forward) - len(minimal)]
        for reverse_index in reverse_primers:
            yield overhang + amplified + reverse_complement(primers[reverse_index])


def simulate_simple(
    sequences: Sequence[str], target_tm: float, circular: bool, primer_list: Sequence[str]
) -> list[str]:
    """Return every PCR product of ``primer_list`` on ``sequences``.

    Concatemerization is not detected. ``circular`` marks the templates as
    circular, like plasmids.
    """
    primers = [primer.upper() for primer in primer_list]
    minimal_primers = [_minimal_binding_site(primer, target_tm) for primer in primers]

    pcr_fragments: list[str] = []
    for sequence in sequences:
        sequence = sequence.upper()
        forward_locations: defaultdict[int, list[int]] = defaultdict(list)
        reverse_locations: defaultdict[int, list[int]] = defaultdict(list)
        for primer_index, minimal in enumerate(minimal_primers):
            if not minimal:
                continue
            for location in _find_all(sequence, minimal):
                forward_locations[location].append(primer_index)
            for location in _find_all(sequence, reverse_complement(minimal)):
                reverse_locations[location].append(primer_index)

        forward_sorted = sorted(forward_locations)
        reverse_sorted = sorted(reverse_locations)

        def amplify(template: str, start: int, stop: int, forward: int, reverse: int) -> None:
            pcr_fragments.extend(
                _fragments(
                    template,
                    start,
                    stop,
                    forward_locations[forward],
                    reverse_locations[reverse],
                    minimal_primers,
                    primers,
                )
            )

        for forward, next_forward in pairwise(forward_sorted):
            reverse = next((r for r in reverse_sorted if forward < r < next_forward), None)
            if reverse is not None:
                amplify(sequence, forward, reverse, forward, reverse)

        if not forward_sorted:
            continue
        last_forward = forward_sorted[-1]
        downstream = [r for r in reverse_sorted if r > last_forward]
        for reverse in downstream:
            amplify(sequence, last_forward, reverse, last_forward, reverse)
        if circular and not downstream:
            for reverse in reverse_sorted:
                if forward_sorted[0] > reverse:
                    rotated = sequence[last_forward:] + sequence[:last_forward]
                    rotated_reverse = len(sequence) - last_forward + reverse
                    amplify(rotated, 0, rotated_reverse, last_forward, reverse)
    return pcr_fragments


def simulate(
    sequences: Sequence[str], target_tm: float, circular: bool, primer_list: Sequence[str]
) -> list[str]:
    """Simulate a PCR and check whether its products amplify themselves.

    Raises :class:`ConcatemerizationError` when they do.
    """
    initial = simulate_simple(sequences, target_tm, circular, primer_list)
    subsequent = simulate_simple(sequences, target_tm, circular, [*primer_list, *initial])
    if len(initial) != len(subsequent):
        raise ConcatemerizationError(initial)
    return initial