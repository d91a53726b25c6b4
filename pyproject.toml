[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polybio"
version = "0.1.0"
description = "Primer melting temperatures, DNA barcodes, PCR simulation and GFF, JSON, UniProt XML and REBASE readers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bioinformatics",
    "dna",
    "primers",
    "pcr",
    "barcodes",
    "de bruijn",
    "gff",
    "uniprot",
    "rebase",
    "synthetic biology",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["polybio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
