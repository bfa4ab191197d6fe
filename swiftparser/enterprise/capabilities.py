"""
Enterprise capability interface.

The façade reaches COBOL transpilation, compliance extraction, ledger
conversion, smart routing and the SEPA / ACH / EDIFACT / MTS parsers only
through an EnterpriseCapabilities object. This build ships
UnavailableCapabilities, whose every method raises EnterpriseRequiredError;
a licensed implementation can be passed to the façade instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from swiftparser.core.exceptions import EnterpriseRequiredError
from swiftparser.core.structured_logging import LogCategory

logger = logging.getLogger(__name__)

ENTERPRISE_CONTACT = "enterprise@gridworks.ai"

CAPABILITY_DESCRIPTIONS = {
    "cobol_transpile": "COBOL transpilation",
    "cobol_parse": "COBOL parsing",
    "compliance": "Compliance extraction",
    "blockchain": "Blockchain conversion",
    "routing": "Smart routing",
    "SEPA": "SEPA parsing",
    "ACH_NACHA": "ACH/NACHA parsing",
    "EDIFACT": "EDIFACT parsing",
    "MTS": "MTS parsing",
}


def enterprise_required(capability: str) -> EnterpriseRequiredError:
    """Build the fixed error for a capability missing from this build."""
    description = CAPABILITY_DESCRIPTIONS.get(capability, capability)
    logger.info(
        f"{description} requested without an enterprise build",
        extra={"category": LogCategory.ENTERPRISE, "metadata": {"capability": capability}},
    )
    return EnterpriseRequiredError(
        f"{description} requires SwiftParser Enterprise. Contact {ENTERPRISE_CONTACT}",
        capability=capability,
    )


class EnterpriseCapabilities(ABC):
    """Capabilities that sit outside the open parsing core."""

    @abstractmethod
    def transpile_cobol(self, message: Any) -> Any:
        """Transpile a COBOL copybook or program."""

    @abstractmethod
    def parse_cobol(self, message: str) -> Any:
        """Parse COBOL copybook data."""

    @abstractmethod
    def extract_compliance(self, record: Any) -> Dict[str, Any]:
        """Extract AML / KYC / sanctions data from a parsed record."""

    @abstractmethod
    def convert_to_blockchain(self, record: Any, network: Optional[str] = None) -> Any:
        """Convert a parsed record to a ledger payload."""

    @abstractmethod
    def route_message(self, record: Any) -> Any:
        """Pick a delivery route for a parsed record."""

    @abstractmethod
    def parse_additional_format(self, message: str, format_label: str) -> Any:
        """Parse SEPA, ACH_NACHA, EDIFACT or MTS payloads."""


class UnavailableCapabilities(EnterpriseCapabilities):
    """The open-source build: every capability raises EnterpriseRequiredError."""

    def transpile_cobol(self, message: Any) -> Any:
        raise enterprise_required("cobol_transpile")

    def parse_cobol(self, message: str) -> Any:
        raise enterprise_required("cobol_parse")

    def extract_compliance(self, record: Any) -> Dict[str, Any]:
        raise enterprise_required("compliance")

    def convert_to_blockchain(self, record: Any, network: Optional[str] = None) -> Any:
        raise enterprise_required("blockchain")

    def route_message(self, record: Any) -> Any:
        raise enterprise_required("routing")

    def parse_additional_format(self, message: str, format_label: str) -> Any:
        raise enterprise_required(format_label.upper())
