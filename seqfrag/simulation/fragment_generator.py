"""
Fragment generation driver.

For every input record: split into regions, sample fragment specs per
region, extract reads, filter them and write accepted reads to the
output stream immediately. Rejected fragments (out of bounds, short
regions, filter failures) are skipped silently and only counted.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, asdict
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, TextIO

import numpy as np

from ..io.io_core_module import SeqRead, SequenceFormat
from .fragment_extractor import FragmentExtractor, SimulatedRead
from .fragment_sampler import FragmentSampler
from .read_filter import ReadFilter
from .region_splitter import split_regions

if TYPE_CHECKING:
    from ..config.fragment_config import FragmentConfig

logger = logging.getLogger(__name__)


# ============================================================================
#                           COUNTERS AND STATS
# ============================================================================

class ReadCounter:
    """Monotonic fragment counter; numbers are never reused within a run."""

    def __init__(self, start: int = 1):
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def last(self) -> int:
        """Last number handed out."""
        return self._next - 1


@dataclass
class FragmentStats:
    """Counts collected over a run."""
    records: int = 0
    regions: int = 0
    regions_skipped: int = 0
    specs_sampled: int = 0
    specs_discarded: int = 0
    fragments_filtered: int = 0
    fragments_emitted: int = 0
    reads_emitted: int = 0
    bases_processed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def summary(self) -> str:
        return (
            f"{self.records} records ({self.bases_processed / 1e6:.2f} Mbp, {self.regions} regions): "
            f"{self.fragments_emitted} fragments / {self.reads_emitted} reads emitted, "
            f"{self.specs_discarded} out of bounds, {self.fragments_filtered} filtered"
        )


class ProgressReporter:
    """Write a running Mbp counter to a diagnostic stream."""

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True):
        self.stream = stream if stream is not None else sys.stderr
        self.enabled = enabled
        self._reported = False

    def report(self, bases: int):
        if not self.enabled:
            return
        self.stream.write(f"\r{bases / 1e6:.1f} Mbp processed")
        self.stream.flush()
        self._reported = True

    def finish(self):
        if self.enabled and self._reported:
            self.stream.write("\n")
            self.stream.flush()


# ============================================================================
#                           GENERATOR
# ============================================================================

class FragmentGenerator:
    """
    Drive fragmentation of a stream of records.

    Args:
        config: Frozen run configuration
        out: Output text stream (default stdout)
        rng: numpy Generator (default seeded from config.seed)
        counter: Fragment counter (default starts at 1)
        progress_stream: Stream for --progress output (default stderr)

    Examples:
        >>> config = FragmentConfig(mode=FragmentMode.SE, read_length=100, coverage=10)
        >>> generator = FragmentGenerator(config, out=sys.stdout)
        >>> stats = generator.run(read_sequences("genome.fa"))
    """

    def __init__(
        self,
        config: FragmentConfig,
        out: Optional[TextIO] = None,
        rng: Optional[np.random.Generator] = None,
        counter: Optional[ReadCounter] = None,
        progress_stream: Optional[TextIO] = None,
    ):
        self.config = config
        self.mode = config.mode
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.counter = counter if counter is not None else ReadCounter()
        self.stats = FragmentStats()
        self.progress = ProgressReporter(progress_stream, enabled=config.progress)

        self.region_length = config.effective_region_length
        self.min_region_length = self.mode.fragment_length(config.read_length, config.insert_size)

        self.sampler = FragmentSampler(
            mode=self.mode,
            read_length=config.read_length,
            coverage=config.coverage,
            insert_size=config.insert_size,
            systematic=config.systematic,
            rng=self.rng,
        )
        # Systematic runs make no random choices at all
        self.extractor = FragmentExtractor(
            mode=self.mode,
            read_length=config.read_length,
            rng=self.rng,
            randomize_strand=not config.systematic,
        )
        self.read_filter = None
        if self.mode.uses_filter:
            self.read_filter = ReadFilter(config.n_max, config.quality, config.quality_offset)

    def run(self, records: Iterable[SeqRead]) -> FragmentStats:
        """
        Process all records.

        Returns:
            Run statistics
        """
        logger.info(
            f"Fragmenting in {self.mode.value} mode: length={self.config.read_length}, "
            f"coverage={self.config.coverage}, systematic={self.config.systematic}, "
            f"region length={self.region_length}"
        )

        for record in records:
            self.process_record(record)

        self.progress.finish()
        logger.info(self.stats.summary())
        return self.stats

    def process_record(self, record: SeqRead) -> int:
        """
        Fragment one record.

        Returns:
            Number of fragments emitted for this record
        """
        emitted_before = self.stats.fragments_emitted
        bases_before = self.stats.bases_processed
        regions = split_regions(record, self.region_length, self.config.overlap)

        self.stats.records += 1
        for region in regions:
            self.process_region(region)
            self.stats.bases_processed = bases_before + (region.offset - record.offset) + region.length
            self.progress.report(self.stats.bases_processed)

        emitted = self.stats.fragments_emitted - emitted_before
        logger.debug(f"{record.id}: {record.length} bp, {len(regions)} regions, {emitted} fragments")
        return emitted

    def process_region(self, region: SeqRead):
        """Sample, extract, filter and emit the fragments of one region."""
        self.stats.regions += 1
        if region.length < self.min_region_length:
            self.stats.regions_skipped += 1
            return

        specs = self.sampler.sample(region.length)
        self.stats.specs_sampled += len(specs) + self.sampler.last_discarded
        self.stats.specs_discarded += self.sampler.last_discarded

        for spec in specs:
            reads = self.extractor.extract(region, spec)
            if not self._accept(reads):
                self.stats.fragments_filtered += 1
                continue
            self._emit(reads, self.counter.next())

    def _accept(self, reads: List[SimulatedRead]) -> bool:
        if self.read_filter is None:
            return True
        # Mate 1 is checked first; mate 2 is never looked at if it fails
        for read in reads:
            if not self.read_filter.passes_read(read):
                return False
        return True

    def _emit(self, reads: List[SimulatedRead], number: int):
        name = f"{self.config.prefix}{number}"
        if self.mode.is_paired:
            names = [f"{name}/1", f"{name}/2"]
        else:
            names = [name]

        for read, read_id in zip(reads, names):
            read = read.named(read_id)
            if self.mode.output_format is SequenceFormat.FASTA:
                self.out.write(read.to_fasta())
            else:
                self.out.write(read.to_fastq(self.config.quality_offset))

        self.stats.fragments_emitted += 1
        self.stats.reads_emitted += len(reads)
