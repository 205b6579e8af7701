"""
Fragmentation modes.

Each mode fixes the output format, the number of reads per fragment,
the nominal fragment length and whether the quality/N filter applies.
"""

from enum import Enum

from ..io.io_core_module import SequenceFormat


class FragmentMode(Enum):
    """Fragmentation strategy, chosen once at configuration time."""
    SE = "se"  # Single-end reads
    PE = "pe"  # Paired-end, inward facing ><
    MP = "mp"  # Mate-pair, outward facing <>
    PACBIO = "pacbio"  # Long reads, negative-binomial lengths
    CONTIG = "contig"  # Tiling contigs, FASTA output

    @property
    def is_paired(self) -> bool:
        return self in (FragmentMode.PE, FragmentMode.MP)

    @property
    def output_format(self) -> SequenceFormat:
        if self is FragmentMode.CONTIG:
            return SequenceFormat.FASTA
        return SequenceFormat.FASTQ

    @property
    def uses_filter(self) -> bool:
        """Contigs are emitted without N/quality filtering."""
        return self is not FragmentMode.CONTIG

    def fragment_length(self, read_length: int, insert_size: int) -> int:
        """Nominal fragment length, also the minimum usable region length."""
        return insert_size if self.is_paired else read_length

    @classmethod
    def choices(cls):
        return [mode.value for mode in cls]
