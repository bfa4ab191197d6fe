"""
ISO 20022 pacs.008 - FI to FI Customer Credit Transfer

Extracts the group header and the first credit transfer transaction of a
pacs.008 document into a nested record. Sibling entry points for pacs.009,
camt.053 and camt.052 recognise their namespace but are not implemented.
"""

from typing import Any, Dict, List, Optional
from xml.etree import ElementTree as ET
import logging

from swiftparser.core.exceptions import (
    InvalidFormatError,
    MissingFieldError,
    UnsupportedTypeError,
)
from swiftparser.extraction import (
    extraction_error,
    logged_extraction,
    require_text,
    to_float,
)
from swiftparser.records import ParsedRecord, ParseMetadata

logger = logging.getLogger(__name__)

FORMAT_FAMILY = "ISO20022"
MESSAGE_TYPE = "ISO20022"

ISO20022_MESSAGES = {
    "pain.001": "CustomerCreditTransferInitiation",
    "pacs.008": "FIToFICstmrCdtTrf",
    "pacs.009": "FinancialInstitutionCreditTransfer",
    "pacs.002": "PaymentStatusReport",
    "camt.053": "BankToCustomerStatement",
    "camt.052": "BankToCustomerAccountReport",
    "setr.010": "SubscriptionOrderInitiation",
    "setr.012": "SubscriptionOrderConfirmation",
    "tsin.004": "TradeServiceInitiation",
    "tsin.008": "TradeServiceStatusNotification",
}


class ISO20022Parser:
    """Parser for ISO 20022 payment messages."""

    SUPPORTED_MESSAGE_TYPES = ("pacs.008", "pacs.009", "camt.053", "camt.052")

    def supported_message_types(self) -> List[str]:
        return list(self.SUPPORTED_MESSAGE_TYPES)

    def parse_pacs008(self, xml_content: str) -> ParsedRecord:
        """Parse pacs.008 XML to a nested record."""
        operation = "ISO 20022 pacs.008"
        with logged_extraction(logger, operation, xml_content):
            require_text(xml_content, operation, FORMAT_FAMILY)
            if "pacs.008" not in xml_content:
                raise extraction_error(
                    InvalidFormatError, operation, "not a pacs.008 message", FORMAT_FAMILY
                )

            root = self._parse_xml(xml_content, operation)
            ns = self._detect_namespace(root)

            fi_to_fi = self._find_element(root, "FIToFICstmrCdtTrf", ns)
            if fi_to_fi is None:
                raise extraction_error(
                    InvalidFormatError, operation, "FIToFICstmrCdtTrf element not found", FORMAT_FAMILY
                )

            grp_hdr = self._find_element(fi_to_fi, "GrpHdr", ns)
            if grp_hdr is None:
                raise extraction_error(
                    MissingFieldError, operation, "GrpHdr element not found", FORMAT_FAMILY,
                    field_name="GrpHdr",
                )

            cdt_trf_tx_inf = self._find_element(fi_to_fi, "CdtTrfTxInf", ns)
            if cdt_trf_tx_inf is None:
                raise extraction_error(
                    MissingFieldError, operation, "CdtTrfTxInf element not found", FORMAT_FAMILY,
                    field_name="CdtTrfTxInf",
                )

            fields = {
                "namespace": ns.get("ns"),
                "groupHeader": self._parse_group_header(grp_hdr, ns, operation),
                "creditTransferTransactionInformation": self._parse_credit_transfer(
                    cdt_trf_tx_inf, ns, operation
                ),
            }

            return ParsedRecord(
                message_type=MESSAGE_TYPE,
                metadata=ParseMetadata(parser=FORMAT_FAMILY, format="pacs.008"),
                fields=fields,
            )

    def _unimplemented(self, xml_content: str, message_type: str) -> ParsedRecord:
        operation = f"ISO 20022 {message_type}"
        with logged_extraction(logger, operation, xml_content):
            require_text(xml_content, operation, FORMAT_FAMILY)
            if message_type not in xml_content:
                raise extraction_error(
                    InvalidFormatError, operation, f"not a {message_type} message", FORMAT_FAMILY
                )
            raise extraction_error(
                UnsupportedTypeError,
                operation,
                f"{message_type} extraction is not implemented",
                FORMAT_FAMILY,
                message_type=message_type,
            )

    def parse_pacs009(self, xml_content: str) -> ParsedRecord:
        return self._unimplemented(xml_content, "pacs.009")

    def parse_camt053(self, xml_content: str) -> ParsedRecord:
        return self._unimplemented(xml_content, "camt.053")

    def parse_camt052(self, xml_content: str) -> ParsedRecord:
        return self._unimplemented(xml_content, "camt.052")

    def _parse_xml(self, xml_content: str, operation: str) -> ET.Element:
        """Parse XML string to element tree."""
        # Remove BOM if present
        if xml_content.startswith("\ufeff"):
            xml_content = xml_content[1:]

        try:
            return ET.fromstring(xml_content.strip())
        except ET.ParseError as e:
            raise extraction_error(
                InvalidFormatError, operation, f"XML parsing error: {e}", FORMAT_FAMILY
            )

    def _detect_namespace(self, root: ET.Element) -> Dict[str, str]:
        """Detect namespace from root element."""
        ns = {}
        tag = root.tag
        if "{" in tag:
            ns["ns"] = tag[1 : tag.index("}")]
        return ns

    def _find_element(self, parent: Optional[ET.Element], name: str, ns: Dict[str, str]) -> Optional[ET.Element]:
        """Find a direct child by local name, with or without namespace."""
        if parent is None:
            return None

        if ns:
            elem = parent.find(f"ns:{name}", ns)
            if elem is not None:
                return elem

        elem = parent.find(name)
        if elem is not None:
            return elem

        for child in parent:
            local_name = child.tag.split("}")[-1] if "}" in child.tag else child.tag
            if local_name == name:
                return child

        return None

    def _find_path(self, parent: Optional[ET.Element], path: str, ns: Dict[str, str]) -> Optional[ET.Element]:
        for name in path.split("/"):
            parent = self._find_element(parent, name, ns)
        return parent

    def _get_text(self, element: Optional[ET.Element], default: Optional[str] = None) -> Optional[str]:
        """Safely get element text."""
        if element is not None and element.text:
            return element.text.strip()
        return default

    def _amount(self, element: Optional[ET.Element], operation: str) -> Optional[Dict[str, Any]]:
        if element is None:
            return None
        return {
            "amount": to_float(self._get_text(element, "0"), element.tag.split("}")[-1], operation, FORMAT_FAMILY),
            "currency": element.get("Ccy"),
        }

    def _parse_group_header(self, grp_hdr: ET.Element, ns: Dict[str, str], operation: str) -> Dict[str, Any]:
        """Parse group header."""
        nb_of_txs = self._get_text(self._find_element(grp_hdr, "NbOfTxs", ns))
        if nb_of_txs is not None and not nb_of_txs.isdigit():
            raise extraction_error(
                InvalidFormatError, operation, f"NbOfTxs is not a count: {nb_of_txs}", FORMAT_FAMILY
            )

        # Settlement method sits directly in GrpHdr in older samples, else under SttlmInf
        settlement_method = self._get_text(self._find_element(grp_hdr, "SttlmMtd", ns))
        if settlement_method is None:
            settlement_method = self._get_text(self._find_path(grp_hdr, "SttlmInf/SttlmMtd", ns))

        return {
            "messageId": self._get_text(self._find_element(grp_hdr, "MsgId", ns)),
            "creationDateTime": self._get_text(self._find_element(grp_hdr, "CreDtTm", ns)),
            "numberOfTransactions": int(nb_of_txs) if nb_of_txs is not None else None,
            "totalInterbankSettlementAmount": self._amount(
                self._find_element(grp_hdr, "TtlIntrBkSttlmAmt", ns), operation
            ),
            "interbankSettlementDate": self._get_text(self._find_element(grp_hdr, "IntrBkSttlmDt", ns)),
            "settlementMethod": settlement_method,
        }

    def _parse_party(self, cdt_trf_tx_inf: ET.Element, prefix: str, ns: Dict[str, str]) -> Dict[str, Any]:
        """Name, account and agent BIC for the debtor (Dbtr) or creditor (Cdtr) side."""
        account = self._find_path(cdt_trf_tx_inf, f"{prefix}Acct/Id", ns)
        return {
            "party": {"name": self._get_text(self._find_path(cdt_trf_tx_inf, f"{prefix}/Nm", ns))},
            "account": {
                "iban": self._get_text(self._find_element(account, "IBAN", ns)),
                "other": self._get_text(self._find_path(account, "Othr/Id", ns)),
            },
            "agent": {"bic": self._get_text(self._find_path(cdt_trf_tx_inf, f"{prefix}Agt/FinInstnId/BICFI", ns))},
        }

    def _parse_credit_transfer(self, cdt_trf_tx_inf: ET.Element, ns: Dict[str, str], operation: str) -> Dict[str, Any]:
        """Parse credit transfer transaction."""
        pmt_id = self._find_element(cdt_trf_tx_inf, "PmtId", ns)
        debtor = self._parse_party(cdt_trf_tx_inf, "Dbtr", ns)
        creditor = self._parse_party(cdt_trf_tx_inf, "Cdtr", ns)

        instructed = self._find_element(cdt_trf_tx_inf, "InstdAmt", ns)
        if instructed is None:
            instructed = self._find_element(cdt_trf_tx_inf, "IntrBkSttlmAmt", ns)

        return {
            "paymentIdentification": {
                "instructionId": self._get_text(self._find_element(pmt_id, "InstrId", ns)),
                "endToEndId": self._get_text(self._find_element(pmt_id, "EndToEndId", ns)),
                "transactionId": self._get_text(self._find_element(pmt_id, "TxId", ns)),
            },
            "instructedAmount": self._amount(instructed, operation),
            "chargeBearerCode": self._get_text(self._find_element(cdt_trf_tx_inf, "ChrgBr", ns)),
            "debtor": debtor["party"],
            "debtorAccount": debtor["account"],
            "debtorAgent": debtor["agent"],
            "creditor": creditor["party"],
            "creditorAccount": creditor["account"],
            "creditorAgent": creditor["agent"],
            "remittanceInformation": {
                "unstructured": self._get_text(self._find_path(cdt_trf_tx_inf, "RmtInf/Ustrd", ns)),
            },
        }
