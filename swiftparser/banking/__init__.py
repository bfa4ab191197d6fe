"""
Core banking system extractors.

- TCS BaNCS: XML, JSON, flat file
- FIS Systematics: fixed width, JSON, pipe-delimited
- Fiserv DNA: JSON
- Temenos: JSON, XML, T24 key=value
"""

from swiftparser.banking.bancs import BANCSParser
from swiftparser.banking.fis import FISParser
from swiftparser.banking.fiserv import FiservParser
from swiftparser.banking.temenos import TemenosParser
from swiftparser.banking.layouts import (
    FixedWidthField,
    BANCS_FLAT_LAYOUT,
    FIS_FIXED_LAYOUT,
    FIS_DELIMITED_FIELDS,
    slice_record,
)

__all__ = [
    "BANCSParser",
    "FISParser",
    "FiservParser",
    "TemenosParser",
    "FixedWidthField",
    "BANCS_FLAT_LAYOUT",
    "FIS_FIXED_LAYOUT",
    "FIS_DELIMITED_FIELDS",
    "slice_record",
]
