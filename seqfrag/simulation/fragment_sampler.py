"""
Fragment offset and length sampling.

Offsets are either evenly spaced (systematic) or drawn uniformly with
replacement and sorted (stochastic). Stochastic lengths depend on the mode:

- se: fixed read length
- pe/mp: normal insert sizes, sd = 0.12 * insert size, clamped to >= read length
- pacbio: negative binomial with n=5, p=5/read_length (mean close to read_length)
- contig: spacing to the next offset plus a negative binomial fuzz NB(5, 0.01) - 400
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .fragment_modes import FragmentMode

logger = logging.getLogger(__name__)


# Distribution parameters
INSERT_SIZE_SD_FRACTION = 0.12
PACBIO_NB_SHAPE = 5
CONTIG_FUZZ_SHAPE = 5
CONTIG_FUZZ_PROB = 0.01
CONTIG_FUZZ_SHIFT = -400


@dataclass(frozen=True)
class FragmentSpec:
    """A candidate fragment within a region's coordinate space."""
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def fits(self, region_length: int) -> bool:
        """True if the fragment is non-empty and lies inside [0, region_length]."""
        return self.offset >= 0 and self.length >= 1 and self.end <= region_length


class FragmentSampler:
    """
    Produce FragmentSpecs for one region at a time.

    Args:
        mode: Fragmentation mode
        read_length: Read length (mean for pacbio, mean spacing for contig)
        coverage: Target coverage
        insert_size: Mean fragment length for pe/mp
        systematic: Evenly spaced offsets, fixed lengths, no RNG use
        rng: numpy Generator (seeded by the caller for reproducibility)
    """

    def __init__(
        self,
        mode: FragmentMode,
        read_length: int,
        coverage: float,
        insert_size: int = 180,
        systematic: bool = False,
        rng: Optional[np.random.Generator] = None,
    ):
        self.mode = mode
        self.read_length = read_length
        self.coverage = coverage
        self.insert_size = insert_size
        self.systematic = systematic
        self.rng = rng if rng is not None else np.random.default_rng()
        self.last_discarded = 0

    @property
    def fragment_length(self) -> int:
        return self.mode.fragment_length(self.read_length, self.insert_size)

    def fragment_count(self, region_length: int) -> int:
        """Number of fragments to draw; pe/mp draw half since each yields two reads."""
        count = region_length * self.coverage / self.read_length
        if self.mode.is_paired:
            count /= 2
        return int(count)

    def sample(self, region_length: int) -> List[FragmentSpec]:
        """
        Sample fragments for a region.

        Specs that end past the region or are empty are dropped;
        their number is kept in ``last_discarded``.

        Args:
            region_length: Length of the region sequence

        Returns:
            FragmentSpecs sorted by offset
        """
        self.last_discarded = 0
        frag_num = self.fragment_count(region_length)
        if frag_num < 1 or region_length < self.fragment_length:
            return []

        if self.systematic:
            offsets = self._systematic_offsets(region_length, frag_num)
            lengths = np.full(frag_num, self.fragment_length, dtype=np.int64)
        else:
            offsets = self._uniform_offsets(region_length, frag_num)
            lengths = self._lengths(offsets, region_length)

        specs = [FragmentSpec(int(o), int(l)) for o, l in zip(offsets, lengths)]
        valid = [spec for spec in specs if spec.fits(region_length)]
        self.last_discarded = len(specs) - len(valid)
        return valid

    def _systematic_offsets(self, region_length: int, frag_num: int) -> np.ndarray:
        step = (region_length - self.fragment_length) // frag_num
        return np.arange(frag_num, dtype=np.int64) * step

    def _uniform_offsets(self, region_length: int, frag_num: int) -> np.ndarray:
        high = region_length - self.fragment_length
        offsets = self.rng.integers(0, high, size=frag_num, endpoint=True)
        return np.sort(offsets)

    def _lengths(self, offsets: np.ndarray, region_length: int) -> np.ndarray:
        size = len(offsets)

        if self.mode is FragmentMode.SE:
            return np.full(size, self.read_length, dtype=np.int64)

        if self.mode.is_paired:
            inserts = self.rng.normal(self.insert_size, INSERT_SIZE_SD_FRACTION * self.insert_size, size)
            inserts = np.rint(inserts).astype(np.int64)
            return np.maximum(inserts, self.read_length)

        if self.mode is FragmentMode.PACBIO:
            p = min(1.0, PACBIO_NB_SHAPE / self.read_length)
            return self.rng.negative_binomial(PACBIO_NB_SHAPE, p, size).astype(np.int64)

        return self._contig_lengths(offsets, region_length)

    def _contig_lengths(self, offsets: np.ndarray, region_length: int) -> np.ndarray:
        # Spacing to the next contig start; the last contig runs to the region end
        next_starts = np.append(offsets[1:], region_length)
        fuzz = self.rng.negative_binomial(CONTIG_FUZZ_SHAPE, CONTIG_FUZZ_PROB, len(offsets)) + CONTIG_FUZZ_SHIFT
        lengths = next_starts - offsets + fuzz
        return np.clip(lengths, 0, region_length - offsets)
