#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

End-to-end tests for the fragment generation driver.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

import io

from seqfrag.config import FragmentConfig, QualityThreshold
from seqfrag.io import SeqRead, SequenceReader
from seqfrag.simulation import FragmentGenerator, FragmentMode, ProgressReporter, ReadCounter
from seqfrag.utils.sequence_utils import reverse_complement

from conftest import parse_fasta, parse_fastq, random_genome


def run_generator(records, **config_args):
    """Run a generator over records and return (output text, stats)."""
    out = io.StringIO()
    config = FragmentConfig(**config_args)
    stats = FragmentGenerator(config, out=out).run(records)
    return out.getvalue(), stats


def is_substring_either_strand(read, genome):
    return read in genome or reverse_complement(read) in genome


class TestReadCounter:
    """Test fragment numbering."""

    def test_starts_at_one(self):
        counter = ReadCounter()
        assert [counter.next() for _ in range(3)] == [1, 2, 3]
        assert counter.last == 3


class TestSingleEnd:
    """Test se generation."""

    def test_systematic_se(self, genome_record, genome_1kb):
        text, stats = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                    coverage=10, systematic=True)
        reads = parse_fastq(text)

        assert len(reads) == 100
        for i, (name, seq, qual) in enumerate(reads, start=1):
            offset = 9 * (i - 1)
            assert name == f"r{i}"
            assert seq == genome_1kb[offset:offset + 100]
            assert qual == "I" * 100

        assert stats.fragments_emitted == 100
        assert stats.reads_emitted == 100
        assert stats.bases_processed == 1000

    def test_systematic_output_is_reproducible(self, genome_record):
        first, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                 coverage=10, systematic=True)
        second, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                  coverage=10, systematic=True, seed=5)
        assert first == second

    def test_seeded_runs_are_reproducible(self, genome_record):
        first, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                 coverage=10, seed=42)
        second, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                  coverage=10, seed=42)
        other, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                 coverage=10, seed=43)
        assert first == second
        assert first != other

    def test_stochastic_reads_come_from_genome(self, genome_record, genome_1kb):
        text, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                coverage=10, seed=1)
        reads = parse_fastq(text)

        assert len(reads) == 100
        assert all(is_substring_either_strand(seq, genome_1kb) for _, seq, _ in reads)

    def test_counter_spans_records(self, genome_1kb):
        records = [SeqRead("chr1", genome_1kb), SeqRead("chr2", random_genome(1000, seed=8))]
        text, stats = run_generator(records, mode=FragmentMode.SE, read_length=100,
                                    coverage=10, systematic=True, prefix="frag")
        names = [name for name, _, _ in parse_fastq(text)]

        assert names == [f"frag{i}" for i in range(1, 201)]
        assert stats.records == 2

    def test_phred64_synthetic_quality(self, genome_record):
        text, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                coverage=1, systematic=True, quality_offset=64)
        assert all(qual == "h" * 100 for _, _, qual in parse_fastq(text))


class TestPairedModes:
    """Test pe/mp generation."""

    def test_systematic_pe(self, genome_record, genome_1kb):
        text, stats = run_generator([genome_record], mode=FragmentMode.PE, read_length=100,
                                    coverage=10, insert_size=300, systematic=True)
        reads = parse_fastq(text)

        assert len(reads) == 100
        assert stats.fragments_emitted == 50
        for k in range(50):
            offset = 14 * k
            (name1, seq1, _), (name2, seq2, _) = reads[2 * k], reads[2 * k + 1]
            assert name1 == f"r{k + 1}/1"
            assert name2 == f"r{k + 1}/2"
            assert seq1 == genome_1kb[offset:offset + 100]
            assert seq2 == reverse_complement(genome_1kb[offset + 200:offset + 300])

    def test_systematic_mp(self, genome_record, genome_1kb):
        text, _ = run_generator([genome_record], mode=FragmentMode.MP, read_length=100,
                                coverage=10, insert_size=300, systematic=True)
        reads = parse_fastq(text)

        _, seq1, _ = reads[0]
        _, seq2, _ = reads[1]
        assert seq1 == reverse_complement(genome_1kb[0:100])
        assert seq2 == genome_1kb[200:300]

    def test_stochastic_pairs_complete(self, genome_record):
        text, stats = run_generator([genome_record], mode=FragmentMode.PE, read_length=50,
                                    coverage=10, insert_size=200, seed=3)
        names = [name for name, _, _ in parse_fastq(text)]

        assert len(names) == 2 * stats.fragments_emitted
        assert names[0::2] == [f"r{i}/1" for i in range(1, stats.fragments_emitted + 1)]
        assert names[1::2] == [f"r{i}/2" for i in range(1, stats.fragments_emitted + 1)]


class TestFiltering:
    """Test N and quality filtering in the pipeline."""

    def _fastq_genome(self, genome, low_start, low_end):
        quality = "I" * low_start + "#" * (low_end - low_start) + "I" * (len(genome) - low_end)
        return f"@chr1\n{genome}\n+\n{quality}\n"

    def test_low_quality_block(self, genome_1kb):
        reader = SequenceReader(io.StringIO(self._fastq_genome(genome_1kb, 500, 510)))
        text, stats = run_generator(reader, mode=FragmentMode.SE, read_length=100,
                                    coverage=10, systematic=True)
        names = [name for name, _, _ in parse_fastq(text)]

        # Offsets 405..504 overlap the low quality block
        assert names == [f"r{i}" for i in range(1, 89)]
        assert stats.fragments_filtered == 12

    def test_relaxed_quality_threshold(self, genome_1kb):
        reader = SequenceReader(io.StringIO(self._fastq_genome(genome_1kb, 500, 510)))
        text, _ = run_generator(reader, mode=FragmentMode.SE, read_length=100, coverage=10,
                                systematic=True, quality=QualityThreshold(20, 10))
        assert len(parse_fastq(text)) == 100

    def test_quality_filter_disabled(self, genome_1kb):
        reader = SequenceReader(io.StringIO(self._fastq_genome(genome_1kb, 500, 510)))
        text, _ = run_generator(reader, mode=FragmentMode.SE, read_length=100, coverage=10,
                                systematic=True, quality=None)
        reads = parse_fastq(text)
        assert len(reads) == 100
        assert reads[50][2] == "I" * 50 + "#" * 10 + "I" * 40

    def test_fasta_input_judged_by_written_quality(self, genome_record):
        kept, _ = run_generator([genome_record], mode=FragmentMode.SE, read_length=100, coverage=10,
                                systematic=True, quality=QualityThreshold(40, 0))
        dropped, stats = run_generator([genome_record], mode=FragmentMode.SE, read_length=100,
                                       coverage=10, systematic=True, quality=QualityThreshold(41, 0))

        assert len(parse_fastq(kept)) == 100
        assert dropped == ""
        assert stats.fragments_filtered == 100

    def test_n_block(self, genome_1kb):
        genome = genome_1kb[:200] + "NNN" + genome_1kb[203:]
        text, stats = run_generator([SeqRead("chr1", genome)], mode=FragmentMode.SE,
                                    read_length=100, coverage=10, systematic=True, n_max=2)
        reads = parse_fastq(text)

        assert len(reads) == 89
        assert all(seq.count("N") == 0 for _, seq, _ in reads)
        assert stats.fragments_filtered == 11

    def test_pair_dropped_when_one_mate_fails(self, genome_1kb):
        # Ns only under mate 2 of the first systematic pair
        genome = genome_1kb[:250] + "N" * 10 + genome_1kb[260:]
        text, _ = run_generator([SeqRead("chr1", genome)], mode=FragmentMode.PE, read_length=100,
                                coverage=1, insert_size=300, systematic=True, n_max=0)
        names = [name for name, _, _ in parse_fastq(text)]

        assert len(names) == 8
        assert "r1/1" in names
        assert all(seq.count("N") == 0 for _, seq, _ in parse_fastq(text))


class TestLongModes:
    """Test pacbio and contig generation."""

    def test_pacbio_lengths_vary(self, genome_record, genome_1kb):
        text, _ = run_generator([genome_record], mode=FragmentMode.PACBIO, read_length=50,
                                coverage=5, seed=11)
        reads = parse_fastq(text)
        lengths = {len(seq) for _, seq, _ in reads}

        assert reads
        assert len(lengths) > 1
        for _, seq, qual in reads:
            assert len(qual) == len(seq)
            assert is_substring_either_strand(seq, genome_1kb)

    def test_contig_fasta(self, genome_record, genome_1kb):
        text, _ = run_generator([genome_record], mode=FragmentMode.CONTIG, read_length=100, seed=2)
        contigs = parse_fasta(text)

        assert contigs
        for i, (name, seq) in enumerate(contigs, start=1):
            assert name == f"r{i}"
            assert 1 <= len(seq) <= 1000
            assert is_substring_either_strand(seq, genome_1kb)

    def test_contig_ignores_filters(self):
        genome = "N" * 1000
        text, _ = run_generator([SeqRead("chr1", genome)], mode=FragmentMode.CONTIG,
                                read_length=100, n_max=0, seed=2)
        assert parse_fasta(text)


class TestRegions:
    """Test region handling inside the driver."""

    def test_long_record_split(self):
        genome = random_genome(50_000, seed=21)
        text, stats = run_generator([SeqRead("chr1", genome)], mode=FragmentMode.SE,
                                    read_length=100, coverage=2, region_length=20_000, seed=4)
        reads = parse_fastq(text)

        assert stats.regions == 3
        assert stats.bases_processed == 50_000
        assert all(len(seq) == 100 for _, seq, _ in reads)
        assert all(is_substring_either_strand(seq, genome) for _, seq, _ in reads)

    def test_short_record_skipped(self, genome_record):
        short = SeqRead("tiny", "ACGT" * 10)
        text, stats = run_generator([short, genome_record], mode=FragmentMode.SE,
                                    read_length=100, coverage=1, systematic=True)

        assert stats.regions_skipped == 1
        assert [name for name, _, _ in parse_fastq(text)] == [f"r{i}" for i in range(1, 11)]


class TestProgress:
    """Test progress reporting."""

    def test_reporter(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream)
        reporter.report(1_500_000)
        reporter.finish()
        assert stream.getvalue() == "\r1.5 Mbp processed\n"

    def test_disabled_reporter(self):
        stream = io.StringIO()
        reporter = ProgressReporter(stream, enabled=False)
        reporter.report(1_500_000)
        reporter.finish()
        assert stream.getvalue() == ""

    def test_generator_progress(self, genome_record):
        stream = io.StringIO()
        config = FragmentConfig(mode=FragmentMode.SE, read_length=100, coverage=1, progress=True)
        FragmentGenerator(config, out=io.StringIO(), progress_stream=stream).run([genome_record])
        assert "Mbp processed" in stream.getvalue()

# SeqFrag v0.1.0
# Any usage is subject to this software's license.
