# A marker is 0xFF followed by a code byte that is neither 0x00 (stuffed literal
# 0xFF inside scan data) nor 0xFF (fill byte).
# Every code except SOI/EOI is followed by a 2 byte big-endian length, and the
# length counts its own 2 bytes.
from __future__ import annotations

import logging
import sys
from typing import BinaryIO, List, Optional, TextIO

from .primitives import (
    EOI, MARKER_PREFIX, SOI, SOS,
    MarkerRecord, NotJpegError, ReadError, ScanConfig,
)
from .sos import dump_sos
from .symbol import long_description, short_name

logger = logging.getLogger(__name__)

JPEG_MAGIC = bytes([MARKER_PREFIX, SOI])


def read_bytes(f: BinaryIO, n: int) -> bytes:
    """Read up to n bytes, turning source failures into ReadError."""
    try:
        return f.read(n)
    except ReadError:
        raise
    except OSError as e:
        raise ReadError(f"read failed: {e}") from e


def read_u16(f: BinaryIO) -> int:
    bytes_read = read_bytes(f, 2)
    if len(bytes_read) != 2:
        raise ReadError("Unexpected length while reading 2 bytes")
    return (bytes_read[0] << 8) | bytes_read[1]


def check_magic(f: BinaryIO) -> None:
    """Raise NotJpegError unless the stream starts with FF D8."""
    head = read_bytes(f, 2)
    if head != JPEG_MAGIC:
        raise NotJpegError(f"missing jpeg magic, got {head.hex() or 'empty stream'}")


def scan_markers(f: BinaryIO, markers: List[MarkerRecord], out: Optional[TextIO] = None) -> None:
    """
    Scan a byte stream for markers, appending a MarkerRecord per marker found.

    Records land in the caller's list as they are discovered so that whatever
    was collected survives a ReadError. SOS payloads are decoded and printed
    inline; scanning then carries on through the entropy coded data.

    Args:
        f: Binary stream, read one byte at a time
        markers: List receiving records in discovery order
        out: Text stream for SOS detail lines (stdout if None)

    Raises:
        ReadError: on a truncated length field or a failing read
    """
    offset = 0
    previous = 0

    while True:
        byte = read_bytes(f, 1)
        if not byte:
            break  # End of stream
        offset += 1
        code = byte[0]

        if previous == MARKER_PREFIX and code not in (MARKER_PREFIX, 0x00):
            record_offset = offset
            size = 0
            if code not in (SOI, EOI):
                size = read_u16(f)
                offset += 2

            record = MarkerRecord(code=code, offset=record_offset, size=size)
            markers.append(record)
            logger.debug("Found %s at %d with size %d", short_name(code), record.position, size)

            if code == SOS:
                payload = read_bytes(f, size)
                offset += len(payload)
                dump_sos(payload, out)

        previous = code


def format_number(value: int, as_hex: bool) -> str:
    return f"{value:#x}" if as_hex else f"{value:d}"


def format_record(source: str, record: MarkerRecord, config: ScanConfig) -> str:
    line = f"{source}:{short_name(record.code)}"
    if config.show_offset:
        line += ":" + format_number(record.position, config.hex)
    if config.show_size:
        line += ":" + format_number(record.size, config.hex)
    if config.describe:
        line += ":" + long_description(record.code)
    return line


def print_info(
    source: str,
    f: BinaryIO,
    config: ScanConfig,
    out: Optional[TextIO] = None,
) -> List[MarkerRecord]:
    """Scan f and print one line per marker once the scan is over.

    The record list is flushed even when the scan stops on a ReadError,
    which is then re-raised.
    """
    if out is None:
        out = sys.stdout

    markers: List[MarkerRecord] = []
    try:
        scan_markers(f, markers, out)
    finally:
        for record in markers:
            print(format_record(source, record, config), file=out)
    return markers
