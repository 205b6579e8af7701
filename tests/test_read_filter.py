#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

Tests for N-content and base quality filtering.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

from seqfrag.config import QualityThreshold
from seqfrag.simulation import ReadFilter, SimulatedRead, passes


class TestNFilter:
    """Test the ambiguous base limit."""

    def test_within_limit(self):
        assert passes("ACGTNN", None, n_max=2)

    def test_over_limit(self):
        assert not passes("ACGTNNN", None, n_max=2)

    def test_lowercase_counts(self):
        assert not passes("acgtnn", None, n_max=1)

    def test_zero_allows_none(self):
        assert passes("ACGT", None, n_max=0)
        assert not passes("ACNT", None, n_max=0)

    def test_disabled(self):
        assert passes("NNNNNNNN", None)


class TestQualityFilter:
    """Test the low-quality base limit."""

    def test_threshold_is_inclusive(self):
        # '5' is Q20, '4' is Q19 at offset 33
        threshold = QualityThreshold(20, 0)
        assert passes("ACGT", "5555", quality_threshold=threshold)
        assert not passes("ACGT", "4555", quality_threshold=threshold)

    def test_max_bad_bases(self):
        threshold = QualityThreshold(20, 2)
        assert passes("ACGT", "!!II", quality_threshold=threshold)
        assert not passes("ACGT", "!!!I", quality_threshold=threshold)

    def test_phred64(self):
        # 'T' is Q20, 'S' is Q19 at offset 64
        threshold = QualityThreshold(20, 0)
        assert passes("ACGT", "TTTT", quality_threshold=threshold, quality_offset=64)
        assert not passes("ACGT", "STTT", quality_threshold=threshold, quality_offset=64)

    def test_missing_quality_skips_check(self):
        assert passes("ACGT", None, quality_threshold=QualityThreshold(40, 0))

    def test_n_checked_alongside_quality(self):
        threshold = QualityThreshold(20, 0)
        assert not passes("ANNT", "IIII", n_max=1, quality_threshold=threshold)


class TestReadFilter:
    """Test the configured filter object."""

    def test_no_limits_by_default(self):
        read_filter = ReadFilter()
        assert read_filter.passes("NNNN", "!!!!")

    def test_passes_read(self):
        read_filter = ReadFilter(n_max=0, quality_threshold=QualityThreshold(20, 0))
        good = SimulatedRead("", "ACGT", "IIII", "chr1", 0, 4)
        low = SimulatedRead("", "ACGT", "II#I", "chr1", 0, 4)
        ambiguous = SimulatedRead("", "ACNT", None, "chr1", 0, 4)

        assert read_filter.passes_read(good)
        assert not read_filter.passes_read(low)
        assert not read_filter.passes_read(ambiguous)

    def test_missing_quality_checked_as_q40(self):
        """Reads without qualities are judged by the Q40 string they are written with."""
        read = SimulatedRead("", "ACGT", None, "chr1", 0, 4)

        assert ReadFilter(quality_threshold=QualityThreshold(40, 0)).passes_read(read)
        assert not ReadFilter(quality_threshold=QualityThreshold(41, 0)).passes_read(read)
        assert not ReadFilter(quality_threshold=QualityThreshold(41, 3)).passes_read(read)
        assert ReadFilter(quality_threshold=QualityThreshold(41, 4)).passes_read(read)

    def test_missing_quality_uses_configured_offset(self):
        read = SimulatedRead("", "ACGT", None, "chr1", 0, 4)
        phred64 = ReadFilter(quality_threshold=QualityThreshold(40, 0), quality_offset=64)
        assert phred64.passes_read(read)
        assert not ReadFilter(quality_threshold=QualityThreshold(41, 0), quality_offset=64).passes_read(read)

# SeqFrag v0.1.0
# Any usage is subject to this software's license.
