[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minikit"
version = "0.1.0"
description = "Building blocks for long-read sequence mapping: range-minimum AVL tree, FASTA/FASTQ reader, selection and radix sorting, alignment backtracking and split-index files"
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "alignment", "fasta", "fastq", "cigar", "avl", "rmq", "radix-sort"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["minikit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
