# --------------------------------------------------------
# |segment name|marker value|has data|description        |
# --------------------------------------------------------
# |SOI         |0xFFD8      |No      | start of image    |
# |EOI         |0xFFD9      |No      | end of image      |
# |SOFn        |0xFFC0-CF   |Yes     | start of frame    |
# |DHT         |0xFFC4      |Yes     | huffman table     |
# |RSTn        |0xFFD0-D7   |No      | restart           |
# |SOS         |0xFFDA      |Yes     | start of scan     |
# |DQT         |0xFFDB      |Yes     | quantization table|
# |DRI         |0xFFDD      |Yes     | restart interval  |
# |APPn        |0xFFE0-EF   |Yes     | application data  |
# |COM         |0xFFFE      |Yes     | comment           |
# --------------------------------------------------------
# SOFn / RSTn / APPn are named after their distance from the range start.
from .primitives import SOI, EOI, SOS

MARKER_NAMES = {
    SOI: "SOI",
    EOI: "EOI",
    0xC4: "DHT",
    0xDB: "DQT",
    SOS: "SOS",
    0xDD: "DRI",
    0xFE: "COM",
}

MARKER_DESCRIPTIONS = {
    SOI: "Start Of Image.",
    EOI: "End Of Image.",
    0xC0: "Start Of Frame (Baseline).",
    0xC2: "Start Of Frame (Progressive).",
    0xC4: "Define Huffman Table.",
    0xDB: "Define Quantization Table.",
    SOS: "Start Of Scan.",
    0xDD: "Define Restart Interval.",
    0xFE: "COMment.",
}


def short_name(code: int) -> str:
    name = MARKER_NAMES.get(code)
    if name is not None:
        return name

    if 0xC0 <= code <= 0xCF:
        return f"SOF{code - 0xC0}"
    if 0xD0 <= code <= 0xD7:
        return f"RST{code - 0xD0}"
    if 0xE0 <= code <= 0xEF:
        return f"APP{code - 0xE0}"
    return f"UNK{code:#x}"


def long_description(code: int) -> str:
    """Human readable description of a marker code.

    Only baseline and progressive frames get a name here; the other SOF
    variants fall through to the unknown message even though short_name
    labels them.
    """
    description = MARKER_DESCRIPTIONS.get(code)
    if description is not None:
        return description

    if 0xD0 <= code <= 0xD7:
        return f"ReSTart ({code - 0xD0})."
    if 0xE0 <= code <= 0xEF:
        return f"APPlication specific ({code - 0xE0})."
    return f"Unknown symbol: {code:#x}"
