import pytest

from polybio.pcr import (
    ConcatemerizationError,
    design_primers,
    design_primers_with_overhangs,
    simulate,
    simulate_simple,
)

GENE = "aataattacaccgagataacacatcatggataaaccgatactcaaagattctatgaagctatttgaggcacttggtacgatcaagtcgcgctcaatgtttggtggcttcggacttttcgctgatgaaacgatgtttgcactggttgtgaatgatcaacttcacatacgagcagaccagcaaacttcatctaacttcgagaagcaagggctaaaaccgtacgtttataaaaagcgtggttttccagtcgttactaagtactacgcgatttccgacgacttgtgggaatccagtgaacgcttgatagaagtagcgaagaagtcgttagaacaagccaatttggaaaaaaagcaacaggcaagtagtaagcccgacaggttgaaagacctgcctaacttacgactagcgactgaacgaatgcttaagaaagctggtataaaatcagttgaacaacttgaagagaaaggtgcattgaatgcttacaaagcgatacgtgactctcactccgcaaaagtaagtattgagctactctgggctttagaaggagcgataaacggcacgcactggagcgtcgttcctcaatctcgcagagaagagctggaaaatgcgctttcttaa"

BAD_FRAGMENT = "ATGACCATGATTACGCCAAGCTTGCATGCCTGCAGGTCGACTCTAGAGGATCCCCGGGTACCGAGCTCGAATTCACTGGCCGTCGTTTTACAACGTCGTGACTGGGAAAACCCTGGCGTTACCCAACTTAATCGCCTTGCAGCACATCCCCCTTTCGCCAGCTGGCGTAATAGCGAAGAGGCCCGCACCGATCGCCCTTCCCAACAGTTGCGCAGCCTGAATGGCGAATGGCGCCTGATGCGGTATTTTCTCCTTACGCATCTGTGCGGTATTTCACACCGCATATGGTGCACTCTCAGTACAATCTGCTCTGATGCCGCATAG"

FORWARD_OVERHANG = "TTATAGGTCTCATACT"
REVERSE_OVERHANG = "ATGAAGAGACCATATA"
FORWARD_PRIMER = "TTATAGGTCTCATACTAATAATTACACCGAGATAACACATCATGG"
REVERSE_PRIMER = "TATATGGTCTCTTCATTTAAGAAAGCGCATTTTCCAGC"


def test_design_primers_with_overhangs():
    fwd, rev = design_primers_with_overhangs(GENE, FORWARD_OVERHANG, REVERSE_OVERHANG, 55.0)
    assert (fwd, rev) == (FORWARD_PRIMER, REVERSE_PRIMER)


def test_design_primers():
    fwd, rev = design_primers(GENE, 55.0)
    assert (fwd, rev) == ("AATAATTACACCGAGATAACACATCATGG", "TTAAGAAAGCGCATTTTCCAGC")


def test_design_primers_too_short_sequence():
    with pytest.raises(ValueError):
        design_primers("ATGC", 55.0)


def test_simulate_example():
    fragments = simulate([GENE], 55.0, False, [FORWARD_PRIMER, REVERSE_PRIMER])
    assert fragments == [FORWARD_OVERHANG + GENE.upper() + REVERSE_OVERHANG]


def test_simulate_basic_example_with_bad_fragment():
    fwd, rev = design_primers_with_overhangs(GENE, FORWARD_OVERHANG, REVERSE_OVERHANG, 55.0)
    fragments = simulate([GENE, BAD_FRAGMENT], 55.0, False, [fwd, rev])
    assert len(fragments) == 1


def test_simulate_primer_rejection():
    primers = [REVERSE_PRIMER, FORWARD_PRIMER, "CTGCAGGTCGACTCTAG"]
    fragments = simulate([GENE], 55.0, False, primers)
    assert len(fragments) == 1


def test_simulate_more_than_one_forward():
    internal_primer = "gatactcaaagattctatgaagctatttgaggcacttggtacg"
    reverse_primer = "tatcgctttgtaagcattcaatgcacctttctcttcaagttg"
    outside_forward_primer = "gtcgttcctcaatctcgcagagaagagctggaaaatg"
    fragments = simulate(
        [GENE], 55.0, False, [internal_primer, reverse_primer, outside_forward_primer]
    )
    assert len(fragments) == 1


def test_simulate_circular():
    forward_primer = "actctgggctttagaaggagcgataaacggc"
    reverse_primer = "aagtgcctcaaatagcttcatagaatctttgagtatcgg"
    target_fragment = "ACTCTGGGCTTTAGAAGGAGCGATAAACGGCACGCACTGGAGCGTCGTTCCTCAATCTCGCAGAGAAGAGCTGGAAAATGCGCTTTCTTAAAATAATTACACCGAGATAACACATCATGGATAAACCGATACTCAAAGATTCTATGAAGCTATTTGAGGCACTT"
    fragments = simulate([GENE], 55.0, True, [forward_primer, reverse_primer])
    assert fragments[0] == target_fragment


def test_simulate_circular_off_gives_nothing_across_origin():
    forward_primer = "actctgggctttagaaggagcgataaacggc"
    reverse_primer = "aagtgcctcaaatagcttcatagaatctttgagtatcgg"
    assert simulate_simple([GENE], 55.0, False, [forward_primer, reverse_primer]) == []


def test_simulate_concatemerization():
    forward_primer = "AATAATTACACCGAGATAACACATCATGG"
    reverse_primer = "CCATGATGTGTTATCTCGGTGTAATTATTTTAAGAAAGCGCATTTTCCAGC"
    with pytest.raises(ConcatemerizationError) as caught:
        simulate([GENE], 55.0, False, [forward_primer, reverse_primer])
    assert str(caught.value) == "Concatemerization detected in PCR."
    assert len(caught.value.fragments) >= 1


def test_simulate_simple_does_not_modify_primer_list():
    primers = ["tatatggtctcttcatttaagaaagcgcattttccagc", FORWARD_PRIMER]
    simulate_simple([GENE], 55.0, False, primers)
    assert primers[0] == "tatatggtctcttcatttaagaaagcgcattttccagc"


def test_simulate_rejects_short_primer():
    with pytest.raises(ValueError):
        simulate_simple([GENE], 55.0, False, ["ATGC"])