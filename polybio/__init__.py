"""Primer melting temperatures, DNA barcodes, PCR simulation and sequence file formats."""

__version__ = "0.1.0"
__all__ = ["gff", "pcr", "polyjson", "primers", "random_sequence", "rebase", "uniprot"]