import argparse
import logging
import sys
from typing import List, Optional

from .marker import check_magic, print_info
from .primitives import NotJpegError, ReadError, ScanConfig

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jpeg-markers",
        description="List the marker segments found in JPEG files",
    )
    parser.add_argument("paths", nargs="+", metavar="FILE", help="JPEG files to scan")
    parser.add_argument("-offset", "--offset", dest="show_offset", action="store_true",
                        help="show offset each marker was found at")
    parser.add_argument("-size", "--size", dest="show_size", action="store_true",
                        help="show size from header of each marker")
    parser.add_argument("-hex", "--hex", dest="hex", action="store_true",
                        help="show size and offset in hex")
    parser.add_argument("-describe", "--describe", dest="describe", action="store_true",
                        help="append the long description of each marker")
    parser.add_argument("-strict", "--strict", dest="strict", action="store_true",
                        help="skip files that do not start with the FF D8 magic")
    parser.add_argument("-verbose", "--verbose", dest="verbose", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    config = ScanConfig(
        show_offset=args.show_offset,
        show_size=args.show_size,
        hex=args.hex,
        describe=args.describe,
    )

    for path in args.paths:
        try:
            f = open(path, "rb")
        except OSError as e:
            logger.error("%s", e)
            continue

        with f:
            try:
                if args.strict:
                    check_magic(f)
                    f.seek(0)
                print_info(path, f, config)
            except NotJpegError as e:
                logger.error("%s: %s", path, e)
                continue
            except ReadError as e:
                # A broken stream stops the whole run, remaining files are not scanned
                logger.critical("%s: %s", path, e)
                return 1

    return 0
