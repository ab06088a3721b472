from dataclasses import dataclass, field
from typing import List

# Marker codes that carry no length field
SOI = 0xD8
EOI = 0xD9

SOS = 0xDA
MARKER_PREFIX = 0xFF


class ReadError(IOError):
    """Raised when the byte source fails mid-scan (anything but a clean end of stream)."""


class NotJpegError(ValueError):
    """Raised when a stream does not open with the FF D8 magic."""


@dataclass(frozen=True)
class MarkerRecord:
    code: int
    # 1-based count of bytes consumed right after the code byte
    offset: int
    # big-endian length field as read, 0 for SOI/EOI
    size: int = 0

    @property
    def position(self) -> int:
        """Offset of the 0xFF byte that opened the marker."""
        return self.offset - 2


@dataclass(frozen=True)
class ScanConfig:
    show_offset: bool = False
    show_size: bool = False
    hex: bool = False
    describe: bool = False


@dataclass
class SosComponent:
    selector: int = 0
    td: int = 0  # DC entropy table
    ta: int = 0  # AC entropy table


@dataclass
class SosHeader:
    ncomp: int = 0
    ss: int = 0
    se: int = 0
    ah: int = 0
    al: int = 0
    components: List[SosComponent] = field(default_factory=list)
