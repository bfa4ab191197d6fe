"""
Format detection.

Detection is an ordered decision table of (predicate, label) rules. The
first rule whose predicate holds supplies the label; there is no scoring.
JSON discriminator rules run against the payload parsed once as a JSON
object, and only when it parses as one.
"""

import logging
import re
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from swiftparser import formats
from swiftparser.core.structured_logging import LogCategory
from swiftparser.enterprise.cobol import detect_cobol
from swiftparser.extraction import try_json_object

logger = logging.getLogger(__name__)

SWIFT_TYPE_PATTERN = re.compile(r"\{2:I(\d{3})")
ISO20022_NAMESPACE_MARKER = "urn:iso:std:iso:20022"


class Payload:
    """A payload under inspection, with its JSON form parsed on first use."""

    def __init__(self, text: str):
        self.text = text

    @cached_property
    def json(self) -> Optional[Dict[str, Any]]:
        return try_json_object(self.text)

    def json_str(self, *path: str) -> Optional[str]:
        """String value at a key path in the JSON object, else None."""
        node: Any = self.json
        for key in path:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node if isinstance(node, str) else None

    def __contains__(self, marker: str) -> bool:
        return marker in self.text


Label = Union[str, Callable[[Payload], str]]


@dataclass(frozen=True)
class DetectionRule:
    name: str
    predicate: Callable[[Payload], bool]
    label: Label

    def resolve(self, payload: Payload) -> str:
        return self.label(payload) if callable(self.label) else self.label


def _is_swift(p: Payload) -> bool:
    return "{1:" in p and "{2:" in p and "{4:" in p and SWIFT_TYPE_PATTERN.search(p.text) is not None


def _swift_label(p: Payload) -> str:
    return f"MT{SWIFT_TYPE_PATTERN.search(p.text).group(1)}"


def _txn_id_prefix(prefix: str) -> Callable[[Payload], bool]:
    def predicate(p: Payload) -> bool:
        transaction_id = p.json_str("transactionId")
        return transaction_id is not None and transaction_id.startswith(prefix)
    return predicate


def _is_fis_json(p: Payload) -> bool:
    # Truthy checks, matching how the discriminators are populated in practice
    return (
        _txn_id_prefix("TXN")(p)
        and bool(p.json.get("transactionType"))
        and bool(p.json.get("branchCode"))
    )


def _is_temenos_json(p: Payload) -> bool:
    message_id = p.json_str("header", "messageId")
    return message_id is not None and message_id.startswith("TMN")


DETECTION_RULES: Tuple[DetectionRule, ...] = (
    DetectionRule("swift_mt", _is_swift, _swift_label),
    DetectionRule(
        "iso20022",
        lambda p: "<?xml" in p and ISO20022_NAMESPACE_MARKER in p,
        formats.ISO20022,
    ),
    DetectionRule(
        "bancs_xml",
        lambda p: "<Transaction>" in p or "TransactionID" in p,
        formats.BANCS_XML,
    ),
    DetectionRule("fiserv_dna", _txn_id_prefix("DNA"), formats.FISERV_DNA),
    DetectionRule("fis_json", _is_fis_json, formats.FIS_JSON),
    DetectionRule("bancs_json", _txn_id_prefix("TXN"), formats.BANCS_JSON),
    DetectionRule("temenos_json", _is_temenos_json, formats.TEMENOS_JSON),
    DetectionRule(
        "temenos_xml",
        lambda p: "<TemenosTransaction>" in p,
        formats.TEMENOS_XML,
    ),
    DetectionRule("cobol", lambda p: detect_cobol(p.text), formats.COBOL),
)


class FormatDetector:
    """Classify an untyped payload by walking the decision table."""

    def __init__(self, rules: Sequence[DetectionRule] = DETECTION_RULES):
        self.rules = tuple(rules)

    def detect(self, payload: Any) -> str:
        """Return the label of the first matching rule, or UNKNOWN. Never raises."""
        if not isinstance(payload, str) or not payload:
            return formats.UNKNOWN

        candidate = Payload(payload)
        for rule in self.rules:
            if rule.predicate(candidate):
                label = rule.resolve(candidate)
                logger.debug(
                    f"Detected format {label}",
                    extra={"category": LogCategory.DETECTION, "metadata": {"rule": rule.name}},
                )
                return label

        return formats.UNKNOWN

    def matching_rule(self, payload: Any) -> Optional[DetectionRule]:
        """The rule that would label this payload, for diagnostics."""
        if not isinstance(payload, str) or not payload:
            return None
        candidate = Payload(payload)
        return next((rule for rule in self.rules if rule.predicate(candidate)), None)


_default_detector = FormatDetector()


def detect_format(payload: Any) -> str:
    return _default_detector.detect(payload)
