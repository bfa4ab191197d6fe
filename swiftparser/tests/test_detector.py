"""
Tests for Format Detection

Tests cover:
- Rule order of the detection decision table
- JSON discriminator precedence
- Non-string, empty and unrecognised payloads
- Custom rule tables
"""

import json

import pytest

from swiftparser import formats
from swiftparser.detection import (
    DETECTION_RULES,
    DetectionRule,
    FormatDetector,
    Payload,
    detect_format,
)
from swiftparser.tests.conftest import (
    BANCS_FLAT_MESSAGE,
    BANCS_JSON_MESSAGE,
    BANCS_XML_MESSAGE,
    COBOL_COPYBOOK,
    FIS_DELIMITED_MESSAGE,
    FIS_FIXED_MESSAGE,
    FIS_JSON_MESSAGE,
    FISERV_DNA_MESSAGE,
    ISO20022_PACS008,
    MT103_MESSAGE,
    MT202_MESSAGE,
    MT950_MESSAGE,
    TEMENOS_JSON_MESSAGE,
    TEMENOS_T24_MESSAGE,
    TEMENOS_XML_MESSAGE,
)


class TestDetectFormat:
    """Tests for the default decision table."""

    @pytest.mark.parametrize(
        "payload,expected",
        [
            (MT103_MESSAGE, "MT103"),
            (MT202_MESSAGE, "MT202"),
            (MT950_MESSAGE, "MT950"),
            (ISO20022_PACS008, formats.ISO20022),
            (BANCS_XML_MESSAGE, formats.BANCS_XML),
            (BANCS_JSON_MESSAGE, formats.BANCS_JSON),
            (FIS_JSON_MESSAGE, formats.FIS_JSON),
            (FISERV_DNA_MESSAGE, formats.FISERV_DNA),
            (TEMENOS_JSON_MESSAGE, formats.TEMENOS_JSON),
            (TEMENOS_XML_MESSAGE, formats.TEMENOS_XML),
            (COBOL_COPYBOOK, formats.COBOL),
        ],
    )
    def test_detects_known_formats(self, payload, expected):
        """Test each structural shape maps to its label."""
        assert detect_format(payload) == expected

    @pytest.mark.parametrize("payload", [None, "", 42, b"{1:", ["{1:"]])
    def test_non_string_or_empty_is_unknown(self, payload):
        """Test invalid inputs never raise and map to UNKNOWN."""
        assert detect_format(payload) == formats.UNKNOWN

    @pytest.mark.parametrize(
        "payload",
        [BANCS_FLAT_MESSAGE, FIS_FIXED_MESSAGE, FIS_DELIMITED_MESSAGE, TEMENOS_T24_MESSAGE],
    )
    def test_positional_formats_are_not_auto_detected(self, payload):
        """Test flat, fixed, delimited and T24 payloads need a format hint."""
        assert detect_format(payload) == formats.UNKNOWN

    def test_plain_text_is_unknown(self):
        """Test free text matches no rule."""
        assert detect_format("hello world") == formats.UNKNOWN

    def test_swift_requires_input_header(self):
        """Test an output-direction header is not recognised as SWIFT."""
        message = MT103_MESSAGE.replace("{2:I103", "{2:O103")
        assert detect_format(message) == formats.UNKNOWN

    def test_swift_requires_all_three_blocks(self):
        """Test a header without a text block is not SWIFT."""
        assert detect_format("{1:F01BANKDEFFAXXX0000000000}{2:I103BANKUS33XXXXN}") == formats.UNKNOWN

    def test_iso_requires_namespace(self):
        """Test an XML declaration alone is not ISO 20022."""
        payload = '<?xml version="1.0"?><Document><Other/></Document>'
        assert detect_format(payload) != formats.ISO20022

    def test_transaction_id_substring_selects_bancs_xml(self):
        """Test the literal TransactionID marker wins over JSON rules."""
        payload = json.dumps({"TransactionID": "X1", "transactionId": "DNA1"})
        assert detect_format(payload) == formats.BANCS_XML


class TestJsonDiscriminators:
    """Tests for JSON discriminator precedence."""

    def test_dna_prefix_wins_over_fis_fields(self):
        """Test a DNA id is Fiserv even with FIS discriminators present."""
        payload = json.dumps({
            "transactionId": "DNA123",
            "transactionType": "CRD",
            "branchCode": "0042",
        })
        assert detect_format(payload) == formats.FISERV_DNA

    def test_txn_without_branch_code_is_bancs(self):
        """Test FIS needs both transactionType and branchCode."""
        payload = json.dumps({"transactionId": "TXN1", "transactionType": "CRD"})
        assert detect_format(payload) == formats.BANCS_JSON

    def test_empty_branch_code_is_bancs(self):
        """Test empty discriminator values do not count."""
        payload = json.dumps({"transactionId": "TXN1", "transactionType": "CRD", "branchCode": ""})
        assert detect_format(payload) == formats.BANCS_JSON

    def test_temenos_prefix_required(self):
        """Test a header messageId without TMN is not Temenos."""
        payload = json.dumps({"header": {"messageId": "ABC001"}})
        assert detect_format(payload) == formats.UNKNOWN

    def test_non_object_json_is_ignored(self):
        """Test JSON arrays never reach the discriminator rules."""
        assert detect_format(json.dumps([{"transactionId": "TXN1"}])) == formats.UNKNOWN

    def test_numeric_transaction_id_is_ignored(self):
        """Test prefix rules only apply to string ids."""
        assert detect_format(json.dumps({"transactionId": 12345})) == formats.UNKNOWN


class TestFormatDetector:
    """Tests for the detector object and custom rule tables."""

    def test_matching_rule_names_rule(self):
        """Test the matching rule is reported for diagnostics."""
        detector = FormatDetector()
        assert detector.matching_rule(MT103_MESSAGE).name == "swift_mt"
        assert detector.matching_rule(FISERV_DNA_MESSAGE).name == "fiserv_dna"
        assert detector.matching_rule("hello world") is None
        assert detector.matching_rule(None) is None

    def test_default_rule_order(self):
        """Test the decision table order."""
        assert [rule.name for rule in DETECTION_RULES] == [
            "swift_mt",
            "iso20022",
            "bancs_xml",
            "fiserv_dna",
            "fis_json",
            "bancs_json",
            "temenos_json",
            "temenos_xml",
            "cobol",
        ]

    def test_custom_rules_are_prepended(self):
        """Test a caller-supplied rule table is evaluated in order."""
        csv_rule = DetectionRule("csv", lambda p: p.text.startswith("id,"), "CSV")
        detector = FormatDetector((csv_rule,) + DETECTION_RULES)

        assert detector.detect("id,amount\n1,100") == "CSV"
        assert detector.detect(MT202_MESSAGE) == "MT202"

    def test_payload_json_path(self):
        """Test nested JSON string lookups."""
        payload = Payload(TEMENOS_JSON_MESSAGE)
        assert payload.json_str("header", "messageId") == "TMN0001"
        assert payload.json_str("header", "missing") is None
        assert payload.json_str("narrative", "deeper") is None
        assert Payload("not json").json is None
