"""
Quality and N-content filtering of candidate reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..utils.sequence_utils import count_ambiguous_bases, decode_quality, high_quality_string

if TYPE_CHECKING:
    from ..config.fragment_config import QualityThreshold
    from .fragment_extractor import SimulatedRead


def passes(
    read_seq: str,
    read_qual: Optional[str],
    n_max: Optional[int] = None,
    quality_threshold: Optional[QualityThreshold] = None,
    quality_offset: int = 33,
) -> bool:
    """
    Check a read against the N and quality filters.

    The N filter applies when n_max is set; the quality filter applies
    when a threshold is set and the read carries a quality string.

    Args:
        read_seq: Read sequence
        read_qual: Encoded quality string (None for FASTA input)
        n_max: Max N/n allowed
        quality_threshold: min_quality / max_bad_bases pair
        quality_offset: ASCII offset of read_qual

    Returns:
        True if the read passes
    """
    if n_max is not None and count_ambiguous_bases(read_seq) > n_max:
        return False

    if quality_threshold is not None and read_qual is not None:
        bad = sum(1 for q in decode_quality(read_qual, quality_offset) if q < quality_threshold.min_quality)
        if bad > quality_threshold.max_bad_bases:
            return False

    return True


class ReadFilter:
    """Configured N/quality filter."""

    def __init__(
        self,
        n_max: Optional[int] = None,
        quality_threshold: Optional[QualityThreshold] = None,
        quality_offset: int = 33,
    ):
        self.n_max = n_max
        self.quality_threshold = quality_threshold
        self.quality_offset = quality_offset

    def passes(self, read_seq: str, read_qual: Optional[str] = None) -> bool:
        return passes(read_seq, read_qual, self.n_max, self.quality_threshold, self.quality_offset)

    def passes_read(self, read: SimulatedRead) -> bool:
        """Check a read against the quality string it will be written with."""
        quality = read.quality
        if quality is None:
            quality = high_quality_string(read.length, self.quality_offset)
        return self.passes(read.sequence, quality)

    def __repr__(self) -> str:
        return f"ReadFilter(n_max={self.n_max}, quality={self.quality_threshold})"
