"""
Fragment simulation for SeqFrag.

Generates synthetic sequencing fragments from genomic sequences:
- Single-end reads (se)
- Paired-end reads, inward facing (pe)
- Mate-pair reads, outward facing (mp)
- Long reads with negative-binomial lengths (pacbio)
- Tiling contigs (contig)

Pipeline: region splitting -> offset/length sampling -> extraction ->
quality/N filtering -> streaming output.
"""

from .fragment_modes import FragmentMode
from .region_splitter import (
    DEFAULT_REGION_LENGTH,
    DEFAULT_REGION_LENGTH_FACTOR,
    effective_region_length,
    region_windows,
    split_regions,
)
from .fragment_sampler import FragmentSpec, FragmentSampler
from .fragment_extractor import FragmentExtractor, SimulatedRead
from .read_filter import ReadFilter, passes
from .fragment_generator import (
    FragmentGenerator,
    FragmentStats,
    ProgressReporter,
    ReadCounter,
)

__all__ = [
    # Modes
    "FragmentMode",

    # Region splitting
    "DEFAULT_REGION_LENGTH",
    "DEFAULT_REGION_LENGTH_FACTOR",
    "effective_region_length",
    "region_windows",
    "split_regions",

    # Sampling
    "FragmentSpec",
    "FragmentSampler",

    # Extraction
    "FragmentExtractor",
    "SimulatedRead",

    # Filtering
    "ReadFilter",
    "passes",

    # Driver
    "FragmentGenerator",
    "FragmentStats",
    "ProgressReporter",
    "ReadCounter",
]
