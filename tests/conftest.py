#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

Pytest configuration and shared fixtures.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

import pytest
import numpy as np
from pathlib import Path
import tempfile
import shutil

from seqfrag.io import SeqRead


def random_genome(length, seed=7):
    """Random ACGT sequence (no Ns) of the given length."""
    rng = np.random.default_rng(seed)
    return ''.join(rng.choice(list('ACGT'), size=length))


def parse_fastq(text):
    """Split FASTQ text into (name, sequence, quality) tuples."""
    lines = text.splitlines()
    assert len(lines) % 4 == 0
    records = []
    for i in range(0, len(lines), 4):
        assert lines[i].startswith('@')
        assert lines[i + 2] == '+'
        records.append((lines[i][1:], lines[i + 1], lines[i + 3]))
    return records


def parse_fasta(text):
    """Split two-line FASTA text into (name, sequence) tuples."""
    lines = text.splitlines()
    assert len(lines) % 2 == 0
    records = []
    for i in range(0, len(lines), 2):
        assert lines[i].startswith('>')
        records.append((lines[i][1:], lines[i + 1]))
    return records


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="seqfrag_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def simple_fasta():
    """Generate simple FASTA sequence for testing."""
    return ">test_sequence\nATCGATCGATCGATCGATCGATCGATCGATCG\n"


@pytest.fixture
def simple_fastq():
    """Generate simple FASTQ reads for testing."""
    return """@read1
ATCGATCGATCG
+
IIIIIIIIIIII
@read2
GCTAGCTAGCTA
+
!#5?IIIIII++
"""


@pytest.fixture
def genome_1kb():
    """Random 1000 bp genome sequence."""
    return random_genome(1000)


@pytest.fixture
def genome_record(genome_1kb):
    """1000 bp genome as a FASTA-style record."""
    return SeqRead(id="chr1", sequence=genome_1kb)


@pytest.fixture
def genome_fasta(genome_1kb):
    """1000 bp genome as FASTA text."""
    return f">chr1\n{genome_1kb}\n"


@pytest.fixture
def rng():
    """Seeded numpy random generator."""
    return np.random.default_rng(12345)

# SeqFrag v0.1.0
# Any usage is subject to this software's license.
