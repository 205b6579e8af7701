"""
Sequence I/O module for SeqFrag.

Handles reading FASTA/FASTQ input with automatic format detection.

CONSOLIDATED MODULES:
- io_core_module.py: SeqRead record, format detection, streaming reader
"""

from .io_core_module import (
    SeqRead,
    SequenceFormat,
    UnrecognizedFormatError,
    PeekableHandle,
    SequenceReader,
    detect_format,
    read_sequences,
    open_file,
    is_gzipped,
)

__all__ = [
    # Core data structures
    "SeqRead",
    "SequenceFormat",

    # Format detection
    "UnrecognizedFormatError",
    "PeekableHandle",
    "detect_format",

    # Reading
    "SequenceReader",
    "read_sequences",
    "open_file",
    "is_gzipped",
]
