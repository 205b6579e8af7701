#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for SeqFrag.

Consolidated module containing:
- Core sequence record structure (SeqRead)
- FASTA/FASTQ format detection on a non-consuming handle
- Streaming record reader (SequenceReader)

The fragment simulator only needs next_seq, seq, qual, substr_seq and
reverse_complement from here; parsing is done by Biopython's SeqIO.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import io
import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple, Union

from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from ..utils.sequence_utils import decode_quality, encode_quality, reverse_complement


# =============================================================================
# SECTION 2: CORE SEQUENCE RECORD
# =============================================================================

Coordinate = Union[int, Tuple[int], Tuple[int, Optional[int]]]


@dataclass(frozen=True)
class SeqRead:
    """
    Sequence record with optional quality.

    Records are immutable; slicing and reverse complementing return new
    records. Sub-range records carry their absolute start position in
    ``metadata['offset']``.

    Attributes:
        id: Record identifier
        sequence: DNA sequence (case preserved)
        quality: Encoded quality string, present iff read from FASTQ
        metadata: Additional metadata
    """
    id: str
    sequence: str
    quality: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        """Validate sequence/quality agreement."""
        if self.quality is not None and len(self.quality) != len(self.sequence):
            raise ValueError(
                f"Quality length {len(self.quality)} does not match "
                f"sequence length {len(self.sequence)} for {self.id}"
            )

    @property
    def seq(self) -> str:
        """Sequence string."""
        return self.sequence

    @property
    def qual(self) -> Optional[str]:
        """Quality string, or None for FASTA records."""
        return self.quality

    @property
    def length(self) -> int:
        """Get record length."""
        return len(self.sequence)

    @property
    def has_quality(self) -> bool:
        return self.quality is not None

    @property
    def offset(self) -> int:
        """Absolute start of this record within its source sequence."""
        return self.metadata.get('offset', 0)

    def substr(self, offset: int, length: Optional[int] = None) -> 'SeqRead':
        """
        Extract a sub-range as a new record.

        Args:
            offset: Start position (0-based)
            length: Number of bases; None runs to the end

        Returns:
            New SeqRead covering the requested range
        """
        if offset < 0 or offset > self.length:
            raise IndexError(f"Offset {offset} outside record {self.id} of length {self.length}")
        end = self.length if length is None else offset + length
        if end > self.length or end < offset:
            raise IndexError(f"Range {offset}:{end} outside record {self.id} of length {self.length}")

        return replace(
            self,
            sequence=self.sequence[offset:end],
            quality=self.quality[offset:end] if self.quality is not None else None,
            metadata={**self.metadata, 'offset': self.offset + offset},
        )

    def substr_seq(self, *coords: Coordinate) -> List['SeqRead']:
        """
        Extract several sub-ranges.

        Each coordinate is ``(offset, length)``, ``(offset,)`` or a bare
        ``offset`` meaning "to the end".

        Example:
            >>> rec = SeqRead("r", "ACGTACGT")
            >>> [r.seq for r in rec.substr_seq((0, 3), (5,))]
            ['ACG', 'CGT']
        """
        regions = []
        for coord in coords:
            if isinstance(coord, int):
                regions.append(self.substr(coord))
            else:
                regions.append(self.substr(*coord))
        return regions

    def reverse_complement(self) -> 'SeqRead':
        """
        Get reverse complement of this record.

        Returns:
            New SeqRead with complemented, reversed sequence and reversed quality
        """
        return replace(
            self,
            sequence=reverse_complement(self.sequence),
            quality=self.quality[::-1] if self.quality is not None else None,
            metadata={**self.metadata, 'is_reverse_complement': not self.metadata.get('is_reverse_complement', False)},
        )

    def phred_scores(self, offset: int = 33) -> Optional[List[int]]:
        """Decode quality string to Phred scores (None without quality)."""
        if self.quality is None:
            return None
        return decode_quality(self.quality, offset)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"SeqRead(id='{self.id}', length={self.length}, offset={self.offset})"


# =============================================================================
# SECTION 3: FILE UTILITIES
# =============================================================================
# Helper functions for file handling with automatic gzip detection

def is_gzipped(filepath: Union[str, Path]) -> bool:
    """
    Check if file is gzip compressed.

    Args:
        filepath: Path to file

    Returns:
        True if file is gzipped
    """
    filepath = Path(filepath)
    return filepath.suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open file with automatic gzip detection.

    Args:
        filepath: Path to file
        mode: File mode ('r' or 'w')

    Returns:
        File handle
    """
    filepath = Path(filepath)

    if is_gzipped(filepath):
        if 'r' in mode:
            return gzip.open(filepath, 'rt')
        else:
            return gzip.open(filepath, 'wt')
    else:
        return open(filepath, mode)


# =============================================================================
# SECTION 4: FORMAT DETECTION
# =============================================================================

class SequenceFormat(Enum):
    """Supported input formats (values are SeqIO format names)."""
    FASTA = "fasta"
    FASTQ = "fastq"


class UnrecognizedFormatError(Exception):
    """Raised when input is neither FASTA nor FASTQ."""
    pass


class PeekableHandle(io.TextIOBase):
    """
    Text handle wrapper that allows looking ahead without consuming.

    Lines returned by ``peek_line`` are buffered and replayed by
    ``readline``/``read``/iteration, so a stream such as stdin can be
    probed for its format and then handed to SeqIO unchanged.
    """

    def __init__(self, handle: TextIO):
        super().__init__()
        self._handle = handle
        self._buffer: List[str] = []

    def readable(self) -> bool:
        return True

    def peek_line(self, index: int = 0) -> str:
        """Return line ``index`` ahead of the read position ('' at EOF)."""
        while len(self._buffer) <= index:
            line = self._handle.readline()
            if not line:
                return ''
            self._buffer.append(line)
        return self._buffer[index]

    def readline(self, size: int = -1) -> str:
        if self._buffer:
            return self._buffer.pop(0)
        return self._handle.readline()

    def read(self, size: Optional[int] = -1) -> str:
        if size == 0:
            return ''
        head = ''.join(self._buffer)
        self._buffer = []
        if size is None or size < 0:
            return head + self._handle.read()
        if len(head) >= size:
            if head[size:]:
                self._buffer.append(head[size:])
            return head[:size]
        return head + self._handle.read(size - len(head))


def _first_record_lines(handle: PeekableHandle, count: int) -> List[str]:
    """Peek the first ``count`` lines starting at the first non-blank line."""
    index = 0
    while True:
        line = handle.peek_line(index)
        if not line or line.strip():
            break
        index += 1
    return [handle.peek_line(index + i) for i in range(count)]


def _is_fasta(lines: List[str]) -> bool:
    return bool(lines) and lines[0].startswith('>')


def _is_fastq(lines: List[str]) -> bool:
    return (
        len(lines) >= 3
        and lines[0].startswith('@')
        and bool(lines[1].strip())
        and lines[2].startswith('+')
    )


def detect_format(handle: PeekableHandle) -> SequenceFormat:
    """
    Detect FASTA or FASTQ from the structure of the first record.

    The handle is not consumed.

    Raises:
        UnrecognizedFormatError: If neither format matches
    """
    lines = _first_record_lines(handle, 3)

    if _is_fasta(lines):
        return SequenceFormat.FASTA
    if _is_fastq(lines):
        return SequenceFormat.FASTQ

    if not lines[0]:
        raise UnrecognizedFormatError("Input is empty, expected FASTA or FASTQ")
    raise UnrecognizedFormatError(
        f"Input is neither FASTA nor FASTQ (first line: {lines[0].rstrip()[:60]!r})"
    )


# =============================================================================
# SECTION 5: STREAMING READER
# =============================================================================

def _to_seq_read(record: SeqRecord, fmt: SequenceFormat) -> SeqRead:
    quality = None
    if fmt is SequenceFormat.FASTQ:
        # Re-encode at offset 33 to recover the raw quality string
        quality = encode_quality(record.letter_annotations.get("phred_quality", []), 33)

    return SeqRead(
        id=record.id,
        sequence=str(record.seq),
        quality=quality,
        metadata={'description': record.description},
    )


class SequenceReader:
    """
    Streaming FASTA/FASTQ reader with automatic format detection.

    Examples:
        >>> reader = SequenceReader(open("genome.fa"))
        >>> reader.format
        <SequenceFormat.FASTA: 'fasta'>
        >>> record = reader.next_seq()
    """

    def __init__(self, handle: TextIO, fmt: Optional[SequenceFormat] = None):
        self._handle = handle if isinstance(handle, PeekableHandle) else PeekableHandle(handle)
        self.format = fmt if fmt is not None else detect_format(self._handle)
        self._records = SeqIO.parse(self._handle, self.format.value)

    def next_seq(self) -> Optional[SeqRead]:
        """Return the next record, or None at end of input."""
        record = next(self._records, None)
        if record is None:
            return None
        return _to_seq_read(record, self.format)

    def __iter__(self) -> Iterator[SeqRead]:
        while True:
            record = self.next_seq()
            if record is None:
                return
            yield record


def read_sequences(source: Union[str, Path, TextIO]) -> Iterator[SeqRead]:
    """
    Read FASTA or FASTQ records from a path, '-' (stdin) or open handle.

    Args:
        source: Path to file (can be gzipped), '-' or a text handle

    Yields:
        SeqRead objects

    Raises:
        FileNotFoundError: If a path does not exist
        UnrecognizedFormatError: If the input format is not recognized
    """
    if isinstance(source, (str, Path)):
        if str(source) == '-':
            yield from SequenceReader(sys.stdin)
            return

        filepath = Path(source)
        if not filepath.exists():
            raise FileNotFoundError(f"Sequence file not found: {filepath}")

        with open_file(filepath, 'r') as handle:
            yield from SequenceReader(handle)
    else:
        yield from SequenceReader(source)
