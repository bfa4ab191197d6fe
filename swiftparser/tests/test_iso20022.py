"""
Tests for ISO 20022 pacs.008 Extraction

Tests cover:
- Group header and credit transfer transaction extraction
- Namespaced and namespace-free documents
- Structural failures
- Unimplemented sibling message types
"""

import pytest

from swiftparser.core.exceptions import (
    InvalidFormatError,
    MalformedValueError,
    MissingFieldError,
    UnsupportedTypeError,
)
from swiftparser.iso20022 import ISO20022_MESSAGES, ISO20022Parser

PACS008_NS = "urn:iso:std:iso:20022:tech:xsd:pacs.008.001.08"


class TestParsePacs008:
    """Tests for pacs.008 extraction."""

    def test_message_type_and_metadata(self, pacs008_message):
        """Test the record envelope."""
        record = ISO20022Parser().parse_pacs008(pacs008_message)

        assert record["messageType"] == "ISO20022"
        assert record.metadata.parser == "ISO20022"
        assert record.metadata.format == "pacs.008"
        assert record["namespace"] == PACS008_NS

    def test_group_header(self, pacs008_message):
        """Test group header fields."""
        header = ISO20022Parser().parse_pacs008(pacs008_message)["groupHeader"]

        assert header == {
            "messageId": "MSG20240115001",
            "creationDateTime": "2024-01-15T10:30:00",
            "numberOfTransactions": 1,
            "totalInterbankSettlementAmount": {"amount": 1000.0, "currency": "EUR"},
            "interbankSettlementDate": "2024-01-15",
            "settlementMethod": "CLRG",
        }

    def test_credit_transfer(self, pacs008_message):
        """Test the credit transfer transaction block."""
        tx = ISO20022Parser().parse_pacs008(pacs008_message)["creditTransferTransactionInformation"]

        assert tx["paymentIdentification"] == {
            "instructionId": "INSTR001",
            "endToEndId": "E2E001",
            "transactionId": "TX001",
        }
        assert tx["instructedAmount"] == {"amount": 1000.0, "currency": "EUR"}
        assert tx["chargeBearerCode"] == "SHAR"
        assert tx["remittanceInformation"] == {"unstructured": "Invoice 2024-001"}

    def test_parties(self, pacs008_message):
        """Test debtor and creditor name, account and agent."""
        tx = ISO20022Parser().parse_pacs008(pacs008_message)["creditTransferTransactionInformation"]

        assert tx["debtor"] == {"name": "John Doe"}
        assert tx["debtorAccount"] == {"iban": "DE89370400440532013000", "other": None}
        assert tx["debtorAgent"] == {"bic": "DEUTDEFF"}
        assert tx["creditor"] == {"name": "Jane Smith"}
        assert tx["creditorAccount"] == {"iban": None, "other": "123456789"}
        assert tx["creditorAgent"] == {"bic": "BNPAFRPP"}

    def test_without_namespace(self):
        """Test a namespace-free document still parses."""
        xml = (
            "<Document><!-- pacs.008 --><FIToFICstmrCdtTrf>"
            "<GrpHdr><MsgId>M1</MsgId><NbOfTxs>2</NbOfTxs><SttlmMtd>INDA</SttlmMtd></GrpHdr>"
            "<CdtTrfTxInf><PmtId><EndToEndId>E1</EndToEndId></PmtId></CdtTrfTxInf>"
            "</FIToFICstmrCdtTrf></Document>"
        )
        record = ISO20022Parser().parse_pacs008(xml)

        assert record["namespace"] is None
        assert record["groupHeader"]["messageId"] == "M1"
        assert record["groupHeader"]["numberOfTransactions"] == 2
        assert record["groupHeader"]["settlementMethod"] == "INDA"
        assert record["groupHeader"]["totalInterbankSettlementAmount"] is None
        tx = record["creditTransferTransactionInformation"]
        assert tx["paymentIdentification"]["endToEndId"] == "E1"
        assert tx["instructedAmount"] is None
        assert tx["debtor"] == {"name": None}

    def test_interbank_amount_fallback(self, pacs008_message):
        """Test the settlement amount stands in for a missing instructed amount."""
        xml = pacs008_message.replace('<InstdAmt Ccy="EUR">1000.00</InstdAmt>', "").replace(
            '<IntrBkSttlmAmt Ccy="EUR">1000.00</IntrBkSttlmAmt>',
            '<IntrBkSttlmAmt Ccy="USD">990.00</IntrBkSttlmAmt>',
        )
        tx = ISO20022Parser().parse_pacs008(xml)["creditTransferTransactionInformation"]
        assert tx["instructedAmount"] == {"amount": 990.0, "currency": "USD"}


class TestPacs008Errors:
    """Tests for pacs.008 failures."""

    def test_not_pacs008(self):
        """Test the namespace substring check."""
        with pytest.raises(InvalidFormatError, match="not a pacs.008 message") as exc_info:
            ISO20022Parser().parse_pacs008('<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.009.001.08"/>')
        assert exc_info.value.format_family == "ISO20022"

    def test_malformed_xml(self):
        """Test XML that does not parse."""
        with pytest.raises(InvalidFormatError, match="XML parsing error"):
            ISO20022Parser().parse_pacs008("<Document>pacs.008<FIToFICstmrCdtTrf></Document>")

    def test_missing_root_element(self):
        """Test a document without FIToFICstmrCdtTrf."""
        xml = f'<Document xmlns="{PACS008_NS}"><Other/></Document>'
        with pytest.raises(InvalidFormatError, match="FIToFICstmrCdtTrf element not found"):
            ISO20022Parser().parse_pacs008(xml)

    def test_missing_group_header(self):
        """Test a document without GrpHdr."""
        xml = f'<Document xmlns="{PACS008_NS}"><FIToFICstmrCdtTrf><CdtTrfTxInf/></FIToFICstmrCdtTrf></Document>'
        with pytest.raises(MissingFieldError, match="GrpHdr element not found"):
            ISO20022Parser().parse_pacs008(xml)

    def test_missing_transaction(self):
        """Test a document without CdtTrfTxInf."""
        xml = f'<Document xmlns="{PACS008_NS}"><FIToFICstmrCdtTrf><GrpHdr/></FIToFICstmrCdtTrf></Document>'
        with pytest.raises(MissingFieldError, match="CdtTrfTxInf element not found"):
            ISO20022Parser().parse_pacs008(xml)

    def test_non_numeric_amount(self, pacs008_message):
        """Test a settlement amount that is not a number."""
        xml = pacs008_message.replace(
            '<TtlIntrBkSttlmAmt Ccy="EUR">1000.00</TtlIntrBkSttlmAmt>',
            '<TtlIntrBkSttlmAmt Ccy="EUR">ONE THOUSAND</TtlIntrBkSttlmAmt>',
        )
        with pytest.raises(MalformedValueError, match="TtlIntrBkSttlmAmt is not numeric"):
            ISO20022Parser().parse_pacs008(xml)

    def test_non_numeric_transaction_count(self, pacs008_message):
        """Test NbOfTxs must be a count."""
        xml = pacs008_message.replace("<NbOfTxs>1</NbOfTxs>", "<NbOfTxs>one</NbOfTxs>")
        with pytest.raises(InvalidFormatError, match="NbOfTxs is not a count"):
            ISO20022Parser().parse_pacs008(xml)


class TestSiblingMessageTypes:
    """Tests for recognised but unimplemented message types."""

    @pytest.mark.parametrize(
        "method,message_type",
        [("parse_pacs009", "pacs.009"), ("parse_camt053", "camt.053"), ("parse_camt052", "camt.052")],
    )
    def test_unimplemented(self, method, message_type):
        """Test the namespace check passes and extraction is refused."""
        xml = f'<Document xmlns="urn:iso:std:iso:20022:tech:xsd:{message_type}.001.08"/>'
        with pytest.raises(UnsupportedTypeError, match="extraction is not implemented"):
            getattr(ISO20022Parser(), method)(xml)

    @pytest.mark.parametrize("method", ["parse_pacs009", "parse_camt053", "parse_camt052"])
    def test_wrong_namespace(self, method, pacs008_message):
        """Test the namespace substring check."""
        with pytest.raises(InvalidFormatError):
            getattr(ISO20022Parser(), method)(pacs008_message)

    def test_catalogue(self):
        """Test the message catalogue and supported list."""
        assert ISO20022_MESSAGES["pacs.008"] == "FIToFICstmrCdtTrf"
        assert len(ISO20022_MESSAGES) == 10
        assert ISO20022Parser().supported_message_types() == [
            "pacs.008", "pacs.009", "camt.053", "camt.052",
        ]
