"""
Format labels shared by the detector, the extractor registry and the façade.
"""

from typing import List, Tuple

UNKNOWN = "UNKNOWN"
COBOL = "COBOL"

ISO20022 = "ISO20022"

BANCS_XML = "BANCS_XML"
BANCS_JSON = "BANCS_JSON"
BANCS_FLAT = "BANCS_FLAT"

FIS_FIXED = "FIS_FIXED"
FIS_JSON = "FIS_JSON"
FIS_DELIMITED = "FIS_DELIMITED"

FISERV_DNA = "FISERV_DNA"

TEMENOS_JSON = "TEMENOS_JSON"
TEMENOS_XML = "TEMENOS_XML"
TEMENOS_T24 = "TEMENOS_T24"

# Formats recognised by name but only parseable with an enterprise build
SEPA = "SEPA"
ACH_NACHA = "ACH_NACHA"
EDIFACT = "EDIFACT"
MTS = "MTS"

SWIFT_MT_TYPES: Tuple[str, ...] = (
    "MT103", "MT202", "MT515", "MT700", "MT798", "MT950", "MT101",
)

SUPPORTED_FORMATS: Tuple[str, ...] = SWIFT_MT_TYPES + (
    ISO20022,
    BANCS_XML, BANCS_JSON, BANCS_FLAT,
    FIS_FIXED, FIS_JSON, FIS_DELIMITED,
    FISERV_DNA,
    TEMENOS_JSON, TEMENOS_XML, TEMENOS_T24,
)

ENTERPRISE_FORMATS: Tuple[str, ...] = (SEPA, ACH_NACHA, EDIFACT, MTS)


def supported_formats() -> List[str]:
    """Return a fresh list of every format label the façade can parse."""
    return list(SUPPORTED_FORMATS)
