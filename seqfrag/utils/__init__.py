"""
Utilities module for SeqFrag.

This module provides shared sequence helpers:
- Reverse complement (case preserving)
- N counting
- Phred quality string encoding and decoding
"""

from .sequence_utils import (
    reverse_complement,
    count_ambiguous_bases,
    decode_quality,
    encode_quality,
    high_quality_string,
)

__all__ = [
    "reverse_complement",
    "count_ambiguous_bases",
    "decode_quality",
    "encode_quality",
    "high_quality_string",
]
