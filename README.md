# polybio

A small library for everyday molecular-biology work on DNA and protein
sequences. It uses only the Python standard library and supports Python 3.10
and later.

- `polybio.primers`: melting temperatures, reverse complements, GC content,
  De Bruijn sequences and well-spaced DNA barcodes.
- `polybio.pcr`: primer design, with or without overhangs, and simulation of
  PCR reactions, including detection of concatemerization.
- `polybio.random_sequence`: seeded random DNA and protein sequences.
- `polybio.gff`, `polybio.polyjson`, `polybio.uniprot`, `polybio.rebase`:
  readers and writers for GFF3, a native JSON format, gzipped UniProt XML
  dumps and REBASE restriction-enzyme dumps (format #31).

## Installation

```
pip install polybio
```

## Primers and barcodes

```python
from polybio import primers

primers.reverse_complement("ATGC")             # 'GCAT'
primers.gc_content("ATGC")                     # 0.5
primers.marmur_doty("ACGTCCGGACTT")            # 31.0
primers.melting_temp("GTAAAACGACGGCCAGT")      # about 52.8 °C
tm, dh, ds = primers.santa_lucia("ACGATGGCAGTAGCATGC", 0.1e-6, 350e-3, 0.0)
```

`melting_temp` calls `santa_lucia` with 500 nM primer, 50 mM sodium and no
magnesium. `marmur_doty` is meant for sequences shorter than 15 bases.

```python
primers.nucleobase_de_bruijn_sequence(4)       # every 4-mer over ATGC exactly once
primers.create_barcodes(20, 4)[0]              # 'AAAATAAAGAAACAATTAAT'
primers.create_barcodes_gc_range(20, 4, 0.25, 0.75)
primers.create_barcodes_with_banned_sequences(
    20, 4, ["CTCTCGGTCGCTCC"], [lambda barcode: "GGG" not in barcode]
)
```

Barcodes are cut from a De Bruijn sequence, so no two share a substring of
`max_sub_sequence` bases. A barcode is moved along while it contains a banned
sequence or its reverse complement, or while one of the functions returns
`False` for it.

## PCR

```python
from polybio import pcr

forward, reverse = pcr.design_primers(gene, 55.0)
forward, reverse = pcr.design_primers_with_overhangs(
    gene, "TTATAGGTCTCATACT", "ATGAAGAGACCATATA", 55.0
)
fragments = pcr.simulate([gene], 55.0, False, [forward, reverse])
```

Primers start at `pcr.MINIMAL_PRIMER_LENGTH` (15) bases and grow until they
reach the target melting temperature. `simulate_simple` returns every
product of the primers on the templates; pass `circular=True` for plasmids.
`simulate` runs a second round with the products added as primers and raises
`pcr.ConcatemerizationError` (its `fragments` attribute holds the first-round
products) when the number of products changes. Target temperatures assume Taq
polymerase.

## Random sequences

```python
from polybio import random_sequence

random_sequence.dna_sequence(15, 2)
random_sequence.protein_sequence(15, 2)        # starts with 'M', ends with '*'
```

The same seed always gives the same sequence. A protein length of two or
less, or a negative DNA length, raises `ValueError`.

## File formats

### GFF3

```python
from polybio import gff

annotated = gff.read("genome.gff")
for feature in annotated.features:
    print(feature.attributes.get("locus_tag"), feature.get_sequence())
gff.write(annotated, "copy.gff")
```

`gff.parse` takes a text or binary stream and `gff.build` returns the file as
bytes. The first two lines must be the `##gff-version` and
`##sequence-region` headers. `Meta.checksum` is a 32-byte BLAKE2b digest of
the parsed file. Locations are zero based with an exclusive end.

### JSON

```python
from polybio import polyjson

sequence = polyjson.Poly(sequence="CATCATCAT")
sequence.add_feature(polyjson.Feature(name="cat", location=polyjson.Location(0, 3)))
polyjson.write(sequence, "sample.json")
polyjson.read("sample.json").features[0].get_sequence()   # 'CAT'
```

`Poly.to_dict` and `Poly.from_dict` convert to and from plain Python data.

### UniProt

```python
from polybio import uniprot

for entry in uniprot.read("uniprot_sprot.xml.gz"):
    print(entry.accession[0], entry.recommended_name, entry.sequence_length)
```

`uniprot.read` opens a gzipped dump and raises at once if the file is missing
or not gzip compressed; `uniprot.parse` streams an uncompressed XML document.
Both yield `Entry` objects one at a time. An `Entry` keeps a selection of each
record: accessions, names, gene and organism names, lineage, database
references, comments, keywords, features, sequence and its attributes, and
dates. `uniprot.parse_int_list` parses evidence lists such as `"1 2 3"`.

### REBASE

```python
from polybio import rebase

enzymes = rebase.read("withrefm.txt")
print(enzymes["AarI"].recognition_sequence)    # 'CACCTGC(4/8)'
json_bytes = rebase.export(enzymes)
```

Supplier codes are resolved to supplier names. An enzyme is stored once the
next record begins. `export` writes compact JSON with names in sorted order.

## What is not included

polybio is a library only: it has no command-line tool. It does not read or
write GenBank or FASTA files on their own, and UniProt dumps can be read but
not written.

## Running the tests

```
pip install -e ".[test]"
pytest
```