"""
SeqFrag v0.1.0

Sequence utility functions for SeqFrag.

Provides the small sequence and quality-string helpers shared by the
I/O layer and the fragment simulator.
"""

from typing import List


COMPLEMENT_MAP = {
    'A': 'T', 'T': 'A',
    'G': 'C', 'C': 'G',
    'N': 'N',
    'a': 't', 't': 'a',
    'g': 'c', 'c': 'g',
    'n': 'n'
}

# Phred score of synthetic qualities
HIGH_QUALITY_SCORE = 40


def reverse_complement(sequence: str) -> str:
    """
    Generate reverse complement of DNA sequence.

    Case is preserved; characters outside ACGTN are passed through.

    Args:
        sequence: DNA sequence string

    Returns:
        Reverse complement sequence

    Example:
        >>> reverse_complement("ATCg")
        'cGAT'
    """
    return ''.join(COMPLEMENT_MAP.get(base, base) for base in reversed(sequence))


def count_ambiguous_bases(sequence: str) -> int:
    """
    Count N/n positions in a sequence.

    Example:
        >>> count_ambiguous_bases("ACNNtn")
        3
    """
    return sequence.count('N') + sequence.count('n')


def decode_quality(quality: str, offset: int = 33) -> List[int]:
    """
    Convert an ASCII quality string to Phred scores.

    Args:
        quality: Encoded quality string
        offset: ASCII offset of the encoding (33 or 64)

    Returns:
        List of integer Phred scores
    """
    return [ord(c) - offset for c in quality]


def encode_quality(scores: List[int], offset: int = 33) -> str:
    """Convert Phred scores to an ASCII quality string."""
    return ''.join(chr(q + offset) for q in scores)


def high_quality_string(length: int, offset: int = 33) -> str:
    """
    Build a synthetic quality string of uniform Q40.

    Example:
        >>> high_quality_string(3)
        'III'
    """
    return chr(HIGH_QUALITY_SCORE + offset) * length


__all__ = [
    'COMPLEMENT_MAP',
    'HIGH_QUALITY_SCORE',
    'reverse_complement',
    'count_ambiguous_bases',
    'decode_quality',
    'encode_quality',
    'high_quality_string',
]
