"""
Fragment extraction.

Turns a FragmentSpec into one read (se, pacbio, contig) or a read pair
(pe, mp). Single reads are reverse complemented with 50% probability.
Pairs get a fixed orientation (pe: mate 2 reversed, inward ><; mp: mate 1
reversed, outward <>) and are then swapped as a whole with 50%
probability.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional

import numpy as np

from ..io.io_core_module import SeqRead
from ..utils.sequence_utils import high_quality_string
from .fragment_modes import FragmentMode
from .fragment_sampler import FragmentSpec


@dataclass(frozen=True)
class SimulatedRead:
    """
    A simulated read with its source coordinates.

    Attributes:
        read_id: Read name (assigned once the read is accepted)
        sequence: Read sequence
        quality: Quality string, None when the source had none
        chrom: Source record identifier
        start_pos: Start position in the source record
        end_pos: End position in the source record
        strand: '+' or '-'
    """
    read_id: str
    sequence: str
    quality: Optional[str]
    chrom: str
    start_pos: int
    end_pos: int
    strand: str = '+'

    @property
    def length(self) -> int:
        return len(self.sequence)

    def named(self, read_id: str) -> 'SimulatedRead':
        return replace(self, read_id=read_id)

    def to_fastq(self, quality_offset: int = 33) -> str:
        """Convert to FASTQ format; missing qualities become uniform Q40."""
        quality = self.quality if self.quality is not None else high_quality_string(self.length, quality_offset)
        return f"@{self.read_id}\n{self.sequence}\n+\n{quality}\n"

    def to_fasta(self) -> str:
        """Convert to FASTA format."""
        return f">{self.read_id}\n{self.sequence}\n"


class FragmentExtractor:
    """
    Extract reads for a FragmentSpec from a region.

    Args:
        mode: Fragmentation mode
        read_length: Read length of each pe/mp mate
        rng: numpy Generator for strand and pair-swap decisions
        randomize_strand: Apply random reverse complement / pair swap
    """

    def __init__(
        self,
        mode: FragmentMode,
        read_length: int,
        rng: Optional[np.random.Generator] = None,
        randomize_strand: bool = True,
    ):
        self.mode = mode
        self.read_length = read_length
        self.rng = rng if rng is not None else np.random.default_rng()
        self.randomize_strand = randomize_strand

    def extract(self, region: SeqRead, spec: FragmentSpec) -> List[SimulatedRead]:
        """
        Extract the read(s) of one fragment.

        Returns:
            One read, or two mates in emission order for pe/mp
        """
        fragment = region.substr(spec.offset, spec.length)

        if self.mode.is_paired:
            return [self._to_read(mate) for mate in self.extract_pair(fragment)]

        if self.randomize_strand and self._coin():
            fragment = fragment.reverse_complement()
        return [self._to_read(fragment)]

    def extract_pair(self, fragment: SeqRead) -> List[SeqRead]:
        """
        Take both ends of a fragment and orient them for the mode.

        Mate 1 is the first read_length bases, mate 2 the last read_length
        bases. pe reverse complements mate 2, mp reverse complements mate 1.
        """
        mate1 = fragment.substr(0, self.read_length)
        mate2 = fragment.substr(fragment.length - self.read_length)

        if self.mode is FragmentMode.PE:
            mate2 = mate2.reverse_complement()
        else:
            mate1 = mate1.reverse_complement()

        pair = [mate1, mate2]
        if self.randomize_strand and self._coin():
            pair.reverse()
        return pair

    def _coin(self) -> bool:
        return self.rng.random() < 0.5

    def _to_read(self, record: SeqRead) -> SimulatedRead:
        is_reverse = record.metadata.get('is_reverse_complement', False)
        quality = None if self.mode is FragmentMode.CONTIG else record.quality
        return SimulatedRead(
            read_id='',
            sequence=record.sequence,
            quality=quality,
            chrom=record.id,
            start_pos=record.offset,
            end_pos=record.offset + record.length,
            strand='-' if is_reverse else '+',
        )
