"""
Region splitting for long input sequences.

Fragments are sampled per region so that substring extraction stays
bounded for whole-chromosome inputs. Consecutive regions overlap by one
nominal fragment length so no fragment is lost at a boundary.
"""

import logging
from typing import List, Optional, Tuple

from ..io.io_core_module import SeqRead

logger = logging.getLogger(__name__)


DEFAULT_REGION_LENGTH = 800_000
DEFAULT_REGION_LENGTH_FACTOR = 100


def effective_region_length(
    region_length: int = DEFAULT_REGION_LENGTH,
    insert_size: int = 180,
    factor: int = DEFAULT_REGION_LENGTH_FACTOR,
) -> int:
    """
    Adjust the region length upward so it stays above factor * insert_size.

    Example:
        >>> effective_region_length(800_000, 180, 100)
        800000
        >>> effective_region_length(800_000, 10_000, 100)
        1000000
    """
    minimum = factor * insert_size
    if region_length < minimum:
        logger.debug(f"Region length {region_length} raised to {minimum} ({factor} x insert size)")
        return minimum
    return region_length


def region_windows(seq_length: int, region_length: int, overlap: int) -> List[Tuple[int, Optional[int]]]:
    """
    Compute (offset, length) windows covering [0, seq_length).

    Windows are region_length + overlap long and advance by region_length;
    the last window has length None and runs to the end.

    Example:
        >>> region_windows(250, 100, 10)
        [(0, 110), (100, 110), (200, None)]
    """
    if seq_length <= region_length:
        return [(0, None)]

    windows = []
    offset = 0
    while offset + region_length + overlap < seq_length:
        windows.append((offset, region_length + overlap))
        offset += region_length
    windows.append((offset, None))
    return windows


def split_regions(record: SeqRead, region_length: int, overlap: int) -> List[SeqRead]:
    """
    Split a record into overlapping regions.

    Args:
        record: Input sequence record
        region_length: Step between region starts
        overlap: Extra bases appended to every region but the last

    Returns:
        [record] if it is short enough, otherwise the region records
    """
    if record.length <= region_length:
        return [record]

    windows = region_windows(record.length, region_length, overlap)
    logger.debug(f"Splitting {record.id} ({record.length} bp) into {len(windows)} regions")
    return record.substr_seq(*windows)
