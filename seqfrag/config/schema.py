"""
SeqFrag v0.1.0

Configuration schema for SeqFrag.

Defines all available configuration parameters with defaults and validation.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

import copy
from typing import Dict, Any, Optional, List, Tuple
from pathlib import Path
import yaml


MODES = ('se', 'pe', 'mp', 'pacbio', 'contig')
PAIRED_MODES = ('pe', 'mp')

# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Fragmentation
    # ========================================================================
    'fragmentation': {
        'mode': None,  # se, pe, mp, pacbio, contig
        'read_length': None,  # Required
        'coverage': None,  # Required unless mode is contig (then 1)
        'insert_size': 180,  # Outer distance of a pair (pe/mp)
        'systematic': False,  # Evenly spaced offsets, no randomness
        'n_max': None,  # Max N per read (None = no N filter)
        'quality': '20:0',  # MIN_QUALITY:MAX_BAD_BASES
        'phred64': False,  # Quality offset 64 instead of 33
        'prefix': 'r',  # Read name prefix
        'seed': None,  # RNG seed (None = fresh entropy)
    },

    # ========================================================================
    # Region Splitting
    # ========================================================================
    'regions': {
        'region_length': 800_000,  # Max bases sampled per region
        'region_length_factor': 100,  # Region length is kept above factor * insert_size
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'progress': False,  # Running Mbp counter on stderr
    },
}


TEMPLATES = {
    'se': {'mode': 'se', 'read_length': 100, 'coverage': 10},
    'pe': {'mode': 'pe', 'read_length': 100, 'coverage': 20, 'insert_size': 300},
    'mp': {'mode': 'mp', 'read_length': 100, 'coverage': 20, 'insert_size': 3000},
    'pacbio': {'mode': 'pacbio', 'read_length': 5000, 'coverage': 10},
    'contig': {'mode': 'contig', 'read_length': 2000, 'coverage': 1},
}


def parse_quality_spec(spec: str) -> Tuple[int, int]:
    """
    Parse a MIN_QUALITY:MAX_BAD_BASES string.

    Args:
        spec: Quality spec, e.g. '20:0'

    Returns:
        (min_quality, max_bad_bases)

    Raises:
        ValueError: If the quality spec is malformed

    Example:
        >>> parse_quality_spec("20:3")
        (20, 3)
    """
    parts = str(spec).split(':')
    if len(parts) != 2:
        raise ValueError(f"Quality spec must be MIN:MAXBAD, got {spec!r}")
    try:
        min_quality, max_bad = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Quality spec must contain two integers, got {spec!r}")
    if min_quality < 0 or max_bad < 0:
        raise ValueError(f"Quality spec values must be non-negative, got {spec!r}")
    return min_quality, max_bad


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary
    """
    from .parser import ConfigParser

    return ConfigParser(config_path).to_dict()


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'se', 'pe', 'mp', 'pacbio', 'contig')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if template != 'default':
        if template not in TEMPLATES:
            raise ValueError(f"Unknown template: {template}")
        config['fragmentation'].update(TEMPLATES[template])

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    frag = config.get('fragmentation', {})
    regions = config.get('regions', {})

    mode = frag.get('mode')
    if mode is None:
        errors.append("Fragmentation mode is required (se, pe, mp, pacbio, contig)")
    elif mode not in MODES:
        errors.append(f"Invalid mode: {mode} (choose from {', '.join(MODES)})")

    read_length = _as_int(frag.get('read_length'))
    if frag.get('read_length') is None:
        errors.append("Read length (--length) is required")
    elif read_length is None or read_length < 1:
        errors.append(f"Read length must be a positive integer, got {frag.get('read_length')!r}")
    elif mode == 'pacbio' and read_length <= 5:
        errors.append("PacBio mean read length must be greater than 5")

    coverage = frag.get('coverage')
    if coverage is None:
        if mode != 'contig':
            errors.append("Coverage (--coverage) is required unless mode is contig")
    else:
        try:
            if float(coverage) <= 0:
                errors.append(f"Coverage must be positive, got {coverage!r}")
        except (TypeError, ValueError):
            errors.append(f"Coverage must be a number, got {coverage!r}")

    insert_size = _as_int(frag.get('insert_size'))
    if insert_size is None or insert_size < 1:
        errors.append(f"Insert size must be a positive integer, got {frag.get('insert_size')!r}")
    elif mode in PAIRED_MODES and read_length is not None and insert_size < read_length:
        errors.append(
            f"Insert size ({insert_size}) must be >= read length ({read_length}) for {mode} mode"
        )

    if frag.get('n_max') is not None:
        n_max = _as_int(frag.get('n_max'))
        if n_max is None or n_max < 0:
            errors.append(f"N-max must be a non-negative integer, got {frag.get('n_max')!r}")

    if frag.get('quality') is not None:
        try:
            parse_quality_spec(frag['quality'])
        except ValueError as e:
            errors.append(str(e))

    region_length = _as_int(regions.get('region_length'))
    if region_length is None or region_length < 1:
        errors.append(f"Region length must be a positive integer, got {regions.get('region_length')!r}")

    factor = _as_int(regions.get('region_length_factor'))
    if factor is None or factor < 1:
        errors.append(
            f"Region length factor must be a positive integer, got {regions.get('region_length_factor')!r}"
        )

    return errors
