import pytest

from polybio.primers import (
    create_barcodes,
    create_barcodes_gc_range,
    create_barcodes_with_banned_sequences,
    gc_content,
    marmur_doty,
    melting_temp,
    nucleobase_de_bruijn_sequence,
    reverse_complement,
    santa_lucia,
)

DE_BRUIJN_4 = (
    "AAAATAAAGAAACAATTAATGAATCAAGTAAGGAAGCAACTAACGAACCATATAGATACATTTATTGATTCATGTATGG"
    "ATGCATCTATCGATCCAGAGACAGTTAGTGAGTCAGGTAGGGAGGCAGCTAGCGAGCCACACTTACTGACTCACGTACG"
    "GACGCACCTACCGACCCTTTTGTTTCTTGGTTGCTTCGTTCCTGTGTCTGGGTGGCTGCGTGCCTCTCGGTCGCTCCGT"
    "CCCGGGGCGGCCGCGCCCCAAA"
)


def test_reverse_complement():
    assert reverse_complement("ATGC") == "GCAT"
    assert reverse_complement("aacg") == "cgtt"


def test_gc_content():
    assert gc_content("GGCC") == 1.0
    assert gc_content("atgc") == 0.5
    with pytest.raises(ValueError):
        gc_content("")


def test_marmur_doty():
    assert marmur_doty("ACGTCCGGACTT") == 31.0


def test_santa_lucia():
    temperature, _, _ = santa_lucia("ACGATGGCAGTAGCATGC", 0.1e-6, 350e-3, 0.0)
    assert temperature == pytest.approx(62.7, rel=0.02)


def test_santa_lucia_reverse_complement():
    sequence = "ACGTAGATCTACGT"
    assert reverse_complement(sequence) == sequence
    temperature, _, _ = santa_lucia(sequence, 0.1e-6, 350e-3, 0.0)
    assert temperature == pytest.approx(47.428514, rel=0.02)


def test_santa_lucia_empty_raises():
    with pytest.raises(ValueError):
        santa_lucia("", 0.1e-6, 350e-3, 0.0)


def test_melting_temp():
    temperature = melting_temp("GTAAAACGACGGCCAGT")
    assert temperature == pytest.approx(52.8, rel=0.02)


def test_melting_temp_case_insensitive():
    assert melting_temp("gtaaaacgacggccagt") == melting_temp("GTAAAACGACGGCCAGT")


def test_de_bruijn_sequence_4():
    assert nucleobase_de_bruijn_sequence(4) == DE_BRUIJN_4


@pytest.mark.parametrize("k", [1, 2, 3, 5])
def test_de_bruijn_every_kmer_once(k):
    sequence = nucleobase_de_bruijn_sequence(k)
    assert len(sequence) == 4**k + k - 1
    kmers = [sequence[i : i + k] for i in range(len(sequence) - k + 1)]
    assert len(set(kmers)) == 4**k == len(kmers)


def test_de_bruijn_rejects_zero():
    with pytest.raises(ValueError):
        nucleobase_de_bruijn_sequence(0)


def test_create_barcodes_with_banned_sequences_first():
    barcodes = create_barcodes_with_banned_sequences(20, 4, ["CTCTCGGTCGCTCC"], [])
    assert barcodes[0] == "AAAATAAAGAAACAATTAAT"


def test_create_barcodes_first():
    assert create_barcodes(20, 4)[0] == "AAAATAAAGAAACAATTAAT"


def test_create_barcodes_gc_range_first():
    barcodes = create_barcodes_gc_range(20, 4, 0.25, 0.75)
    assert barcodes[0] == "GAAACAATTAATGAATCAAG"
    assert all(0.25 <= gc_content(barcode) <= 0.75 for barcode in barcodes)


def test_create_barcode_banned_function():
    barcodes = create_barcodes_with_banned_sequences(
        20, 4, [], [lambda s: "GGCCGCGCCCC" not in s]
    )
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_create_barcode_banned_sequence():
    barcodes = create_barcodes_with_banned_sequences(20, 4, ["GGCCGCGCCCC"], [])
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_create_barcode_banned_reverse_complement():
    barcodes = create_barcodes_with_banned_sequences(
        20, 4, [reverse_complement("GGCCGCGCCCC")], []
    )
    assert barcodes[-1] == "CTCTCGGTCGCTCCGTCCCG"


def test_barcodes_share_no_long_substring():
    barcodes = create_barcodes(20, 4)
    seen = {}
    for number, barcode in enumerate(barcodes):
        for i in range(len(barcode) - 3):
            kmer = barcode[i : i + 4]
            assert seen.setdefault(kmer, number) == number


def test_barcode_length_must_cover_subsequence():
    with pytest.raises(ValueError):
        create_barcodes(3, 5)