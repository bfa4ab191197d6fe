"""
SWIFT MT field-tag tables.

Static, read-only lookups from message type to the tags it recognises
(tag -> semantic field name) and to the tags it requires. The tables are
wrapped in MappingProxyType so nothing can mutate them after import.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple


def _freeze(tables: Dict[str, Dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({name: MappingProxyType(tags) for name, tags in tables.items()})


_MT103 = {
    "20": "transaction_reference",
    "23B": "bank_operation_code",
    "32A": "value_date_currency_amount",
    "50K": "ordering_customer",
    "52A": "ordering_institution",
    "53A": "senders_correspondent",
    "56A": "intermediary_institution",
    "57A": "account_with_institution",
    "59": "beneficiary_customer",
    "70": "remittance_information",
    "71A": "details_of_charges",
}

_MT202 = {
    "20": "transaction_reference",
    "21": "related_reference",
    "32A": "value_date_currency_amount",
    "52A": "ordering_institution",
    "53A": "senders_correspondent",
    "56A": "intermediary_institution",
    "57A": "account_with_institution",
    "58A": "beneficiary_institution",
    "72": "sender_to_receiver_information",
}

# Securities trade confirmation
_MT515 = {
    "20C": "reference",
    "23G": "function",
    "22F": "indicator",
    "97A": "safekeeping_account",
    "35B": "security_identification",
    "36B": "quantity_of_financial_instrument",
    "69A": "trade_date",
    "69B": "settlement_date",
    "90A": "dealing_price",
    "19A": "amount",
}

# Issue of a documentary credit
_MT700 = {
    "20": "documentary_credit_number",
    "31C": "date_of_issue",
    "31D": "date_and_place_of_expiry",
    "32B": "currency_amount",
    "39A": "percentage_credit_amount_tolerance",
    "41A": "available_with_by",
    "42C": "drafts_at",
    "43P": "partial_shipments",
    "43T": "transhipment",
    "44A": "loading_on_board",
    "44B": "for_transportation_to",
    "44C": "latest_date_of_shipment",
    "45A": "description_of_goods",
    "46A": "documents_required",
    "47A": "additional_conditions",
    "50": "applicant",
    "59": "beneficiary",
}

# Proprietary message
_MT798 = {
    "20": "reference",
    "21": "related_reference",
    "77A": "proprietary_message",
    "12": "sub_message_type",
    "77E": "envelope_contents",
    "32A": "value_date_currency_amount",
    "50K": "ordering_customer",
    "59": "beneficiary",
}

# Statement message
_MT950 = {
    "20": "transaction_reference",
    "25": "account_identification",
    "28C": "statement_number",
    "60F": "opening_balance",
    "61": "statement_line",
    "62F": "closing_balance",
    "64": "closing_available_balance",
    "65": "forward_available_balance",
    "86": "information_to_account_owner",
}

# Request for transfer
_MT101 = {
    "20": "transaction_reference",
    "23": "instruction_code",
    "32A": "value_date_currency_amount",
    "50A": "instructing_party",
    "51A": "sending_institution",
    "52A": "account_servicing_institution",
    "53A": "account_with_institution",
    "54A": "receiving_institution",
    "59": "beneficiary_customer",
    "70": "remittance_information",
    "71A": "details_of_charges",
}

SWIFT_FIELDS = _freeze({"MT103": _MT103, "MT202": _MT202})

ENHANCED_SWIFT_FIELDS = _freeze({
    "MT103": _MT103,
    "MT202": _MT202,
    "MT515": _MT515,
    "MT700": _MT700,
    "MT798": _MT798,
    "MT950": _MT950,
    "MT101": _MT101,
})

REQUIRED_FIELDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "MT103": ("20", "32A", "50K", "59"),
    "MT202": ("20", "32A", "52A", "58A"),
})

ENHANCED_REQUIRED_FIELDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "MT103": REQUIRED_FIELDS["MT103"],
    "MT202": REQUIRED_FIELDS["MT202"],
    "MT515": ("20C",),
    "MT700": ("20",),
    "MT798": ("20",),
    "MT950": ("20",),
    "MT101": ("20",),
})

BASE_SUPPORTED_TYPES: Tuple[str, ...] = tuple(SWIFT_FIELDS)
ENHANCED_SUPPORTED_TYPES: Tuple[str, ...] = tuple(ENHANCED_SWIFT_FIELDS)
