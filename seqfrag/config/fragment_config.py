#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SeqFrag v0.1.0

Frozen runtime configuration for a fragmentation run.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .parser import ConfigParser, ConfigValidationError
from .schema import parse_quality_spec, validate_config
from ..simulation.fragment_modes import FragmentMode
from ..simulation.region_splitter import effective_region_length


@dataclass(frozen=True)
class QualityThreshold:
    """Reads fail when more than max_bad_bases positions are below min_quality."""
    min_quality: int = 20
    max_bad_bases: int = 0

    @classmethod
    def parse(cls, spec: str) -> 'QualityThreshold':
        min_quality, max_bad_bases = parse_quality_spec(spec)
        return cls(min_quality, max_bad_bases)


@dataclass(frozen=True)
class FragmentConfig:
    """
    Immutable configuration of a fragmentation run.

    Attributes:
        mode: Fragmentation strategy
        read_length: Read length (mean length for pacbio, mean spacing for contig)
        coverage: Target coverage
        insert_size: Fragment length for pe/mp
        systematic: Evenly spaced offsets and no random choices
        n_max: Max N per read (None disables the N filter)
        quality: Quality threshold (None disables the quality filter)
        quality_offset: ASCII offset of quality strings (33 or 64)
        prefix: Read name prefix
        region_length: Configured region length before adjustment
        region_length_factor: Region length is kept above factor * insert_size
        seed: RNG seed
        progress: Report processed Mbp on stderr
    """
    mode: FragmentMode
    read_length: int
    coverage: float = 1.0
    insert_size: int = 180
    systematic: bool = False
    n_max: Optional[int] = None
    quality: Optional[QualityThreshold] = QualityThreshold()
    quality_offset: int = 33
    prefix: str = 'r'
    region_length: int = 800_000
    region_length_factor: int = 100
    seed: Optional[int] = None
    progress: bool = False

    def __post_init__(self):
        if self.read_length < 1:
            raise ConfigValidationError(f"Read length must be positive, got {self.read_length}")
        if self.coverage <= 0:
            raise ConfigValidationError(f"Coverage must be positive, got {self.coverage}")
        if self.mode.is_paired and self.insert_size < self.read_length:
            raise ConfigValidationError(
                f"Insert size ({self.insert_size}) must be >= read length "
                f"({self.read_length}) for {self.mode.value} mode"
            )
        if self.n_max is not None and self.n_max < 0:
            raise ConfigValidationError(f"N-max must be non-negative, got {self.n_max}")

    @property
    def fragment_length(self) -> int:
        """Nominal fragment length of the mode."""
        return self.insert_size if self.mode.is_paired else self.read_length

    @property
    def overlap(self) -> int:
        """Overlap between consecutive regions."""
        return self.fragment_length

    @property
    def effective_region_length(self) -> int:
        return effective_region_length(self.region_length, self.insert_size, self.region_length_factor)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'FragmentConfig':
        """
        Build a FragmentConfig from a merged configuration dictionary.

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        errors = validate_config(config)
        if errors:
            raise ConfigValidationError("; ".join(errors))

        frag = config['fragmentation']
        regions = config['regions']
        mode = FragmentMode(frag['mode'])

        coverage = frag.get('coverage')
        if coverage is None:
            coverage = 1

        quality = frag.get('quality')
        n_max = frag.get('n_max')
        seed = frag.get('seed')

        return cls(
            mode=mode,
            read_length=int(frag['read_length']),
            coverage=float(coverage),
            insert_size=int(frag['insert_size']),
            systematic=bool(frag.get('systematic', False)),
            n_max=int(n_max) if n_max is not None else None,
            quality=QualityThreshold.parse(quality) if quality is not None else None,
            quality_offset=64 if frag.get('phred64') else 33,
            prefix=str(frag.get('prefix', 'r')),
            region_length=int(regions['region_length']),
            region_length_factor=int(regions['region_length_factor']),
            seed=int(seed) if seed is not None else None,
            progress=bool(config.get('output', {}).get('progress', False)),
        )

    @classmethod
    def from_parser(cls, parser: ConfigParser) -> 'FragmentConfig':
        return cls.from_dict(parser.to_dict())

# SeqFrag v0.1.0
# Any usage is subject to this software's license.
