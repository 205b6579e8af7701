"""
SeqFrag v0.1.0

Configuration management for SeqFrag.

Author: SeqFrag Development Team
License: MIT - See LICENSE
"""

from .parser import ConfigParser, ConfigValidationError
from .schema import DEFAULT_CONFIG, load_config, save_config_template, validate_config
from .fragment_config import FragmentConfig, QualityThreshold

__all__ = [
    "ConfigParser",
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config_template",
    "validate_config",
    "FragmentConfig",
    "QualityThreshold",
]
