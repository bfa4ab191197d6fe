"""
Fixed-width record layouts.

Each layout is an ordered tuple of (field name, start, end) character
offsets. ``end`` of None runs to the end of the record.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class FixedWidthField:
    name: str
    start: int
    end: Optional[int] = None


Layout = Tuple[FixedWidthField, ...]

BANCS_FLAT_MIN_LENGTH = 50
BANCS_FLAT_LAYOUT: Layout = (
    FixedWidthField("transactionId", 0, 15),
    FixedWidthField("accountNumber", 15, 30),
    FixedWidthField("amount", 30, 42),
    FixedWidthField("currency", 42, 47),
    FixedWidthField("valueDate", 47, 55),
    FixedWidthField("description", 55),
)

FIS_FIXED_MIN_LENGTH = 100
FIS_FIXED_LAYOUT: Layout = (
    FixedWidthField("recordType", 0, 2),
    FixedWidthField("transactionId", 2, 17),
    FixedWidthField("accountNumber", 17, 32),
    FixedWidthField("amount", 32, 41),  # integer cents
    FixedWidthField("currency", 41, 44),
    FixedWidthField("valueDate", 44, 52),
    FixedWidthField("transactionType", 52, 55),
    FixedWidthField("description", 55, 100),
    FixedWidthField("customerName", 100, 150),
    FixedWidthField("branchCode", 150, 154),
)

FIS_DELIMITED_MIN_FIELDS = 8
FIS_DELIMITED_FIELDS: Tuple[str, ...] = (
    "transactionId",
    "accountNumber",
    "amount",
    "currency",
    "valueDate",
    "transactionType",
    "description",
    "customerName",
    "branchCode",
)


def slice_record(record: str, layout: Layout) -> Dict[str, str]:
    """Cut a record at the layout's offsets, trimming each slice."""
    return {f.name: record[f.start:f.end].strip() for f in layout}
