"""Start Of Scan header decoding.

SOS payload layout (after the 2 byte length field):

    ncomp                       1 byte
    (selector, td:ta) * ncomp   2 bytes each
    ss                          1 byte, spectral selection start
    se                          1 byte, spectral selection end
    ah:al                       1 byte, successive approximation high/low
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

import numpy as np

from .primitives import SosHeader, SosComponent

logger = logging.getLogger(__name__)

# ncomp + ss + se + ah:al
SOS_FIXED_BYTES = 4


def decode_sos(payload: bytes) -> SosHeader:
    """Decode an SOS payload into a SosHeader.

    Never raises on malformed input. A payload too short for its declared
    component count is padded with zero bytes before decoding, and only the
    component pairs the payload actually holds are kept.
    """
    ncomp = payload[0] if payload else 0
    needed = SOS_FIXED_BYTES + 2 * ncomp
    if len(payload) < needed:
        logger.warning(
            "SOS payload has %d bytes, %d components need %d; missing fields read as 0",
            len(payload), ncomp, needed,
        )

    buf = np.zeros(max(len(payload), needed), dtype=np.uint8)
    buf[:len(payload)] = np.frombuffer(payload, dtype=np.uint8)

    # (selector, table) pairs, table packs DC in the high nibble and AC in the low one
    present = min(ncomp, max(0, (len(payload) - 1) // 2))
    pairs = buf[1:1 + 2 * present].reshape(present, 2)
    selectors = pairs[:, 0]
    td = pairs[:, 1] >> 4
    ta = pairs[:, 1] & 0x0F

    ss, se, approx = buf[1 + 2 * ncomp:SOS_FIXED_BYTES + 2 * ncomp]

    return SosHeader(
        ncomp=ncomp,
        ss=int(ss),
        se=int(se),
        ah=int(approx >> 4),
        al=int(approx & 0x0F),
        components=[
            SosComponent(selector=int(s), td=int(d), ta=int(a))
            for s, d, a in zip(selectors, td, ta)
        ],
    )


def format_sos(header: SosHeader) -> List[str]:
    lines = [f"SOS\tss={header.ss}\tse={header.se}\tah={header.ah}\tal={header.al}"]
    for comp in header.components:
        lines.append(f"  #{comp.selector} td={comp.td} ta={comp.ta}")
    return lines


def dump_sos(payload: bytes, out: Optional[TextIO] = None) -> SosHeader:
    """Decode an SOS payload and print it right away."""
    if out is None:
        out = sys.stdout

    header = decode_sos(payload)
    for line in format_sos(header):
        print(line, file=out)
    return header
