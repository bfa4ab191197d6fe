"""
swiftparser - Pytest Configuration and Fixtures

Shared payload fixtures for every supported format, plus a façade built on
a test configuration.
"""

import json

import pytest

from swiftparser.core.config import Environment, ParserConfig
from swiftparser.parser import SwiftParserOSS


MT103_MESSAGE = """{1:F01BANKDEFFAXXX0000000000}{2:I103BANKUS33XXXXN}{4:
:20:REF123456789
:23B:CRED
:32A:230115USD1000,00
:50K:/12345678
JOHN DOE
123 MAIN STREET
NEW YORK
:52A:BANKDEFFXXX
:57A:BANKUS33XXX
:59:/87654321
JANE SMITH
456 OAK AVENUE
LONDON
:70:INVOICE 12345
:71A:SHA
-}"""

MT202_MESSAGE = """{1:F01BANKDEFFAXXX0000000000}{2:I202BANKUS33XXXXN}{4:
:20:FIN202REF
:21:RELREF001
:32A:240301EUR250000,00
:52A:BANKDEFFXXX
:58A:BANKUS33XXX
:72:/BNF/COVER PAYMENT
-}"""

MT950_MESSAGE = """{1:F01BANKDEFFAXXX0000000000}{2:I950BANKUS33XXXXN}{4:
:20:STMT0001
:25:DE89370400440532013000
:28C:00001/001
:60F:C230115EUR10000,00
:61:2301150115C500,00NTRFNONREF
:61:2301150115D200,00NTRFNONREF
:62F:C230115EUR10300,00
-}"""

MT700_MESSAGE = """{1:F01BANKDEFFAXXX0000000000}{2:I700BANKUS33XXXXN}{4:
:20:LC2024001
:31C:240115
:31D:240415LONDON
:32B:USD150000,00
:50:IMPORTER LTD
:59:EXPORTER GMBH
:45A:500 UNITS OF MACHINE PARTS
-}"""

ISO20022_PACS008 = """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:pacs.008.001.08">
  <FIToFICstmrCdtTrf>
    <GrpHdr>
      <MsgId>MSG20240115001</MsgId>
      <CreDtTm>2024-01-15T10:30:00</CreDtTm>
      <NbOfTxs>1</NbOfTxs>
      <TtlIntrBkSttlmAmt Ccy="EUR">1000.00</TtlIntrBkSttlmAmt>
      <IntrBkSttlmDt>2024-01-15</IntrBkSttlmDt>
      <SttlmInf>
        <SttlmMtd>CLRG</SttlmMtd>
      </SttlmInf>
    </GrpHdr>
    <CdtTrfTxInf>
      <PmtId>
        <InstrId>INSTR001</InstrId>
        <EndToEndId>E2E001</EndToEndId>
        <TxId>TX001</TxId>
      </PmtId>
      <IntrBkSttlmAmt Ccy="EUR">1000.00</IntrBkSttlmAmt>
      <InstdAmt Ccy="EUR">1000.00</InstdAmt>
      <ChrgBr>SHAR</ChrgBr>
      <Dbtr>
        <Nm>John Doe</Nm>
      </Dbtr>
      <DbtrAcct>
        <Id>
          <IBAN>DE89370400440532013000</IBAN>
        </Id>
      </DbtrAcct>
      <DbtrAgt>
        <FinInstnId>
          <BICFI>DEUTDEFF</BICFI>
        </FinInstnId>
      </DbtrAgt>
      <CdtrAgt>
        <FinInstnId>
          <BICFI>BNPAFRPP</BICFI>
        </FinInstnId>
      </CdtrAgt>
      <Cdtr>
        <Nm>Jane Smith</Nm>
      </Cdtr>
      <CdtrAcct>
        <Id>
          <Othr>
            <Id>123456789</Id>
          </Othr>
        </Id>
      </CdtrAcct>
      <RmtInf>
        <Ustrd>Invoice 2024-001</Ustrd>
      </RmtInf>
    </CdtTrfTxInf>
  </FIToFICstmrCdtTrf>
</Document>"""

BANCS_XML_MESSAGE = (
    "<Transaction>"
    "<TransactionID>BNC0001</TransactionID>"
    "<Amount>1500.50</Amount>"
    "<Currency>USD</Currency>"
    "<DebitAccount>ACC001</DebitAccount>"
    "<CreditAccount>ACC002</CreditAccount>"
    "<Description>Salary payment</Description>"
    "</Transaction>"
)

BANCS_JSON_MESSAGE = json.dumps({
    "transactionId": "TXN0001",
    "accountNumber": "ACC001",
    "amount": 1500.5,
    "currency": "USD",
    "valueDate": "2024-01-15",
    "description": "Salary payment",
})

# transactionId, accountNumber, amount, currency, valueDate, description
BANCS_FLAT_MESSAGE = (
    "TXN000000000001"
    + "ACC000000000001"
    + "000001500.50"
    + "USD".ljust(5)
    + "20240115"
    + "SALARY PAYMENT"
)

# recordType .. branchCode; amount column in cents
FIS_FIXED_MESSAGE = (
    "01"
    + "TXN000000000001"
    + "ACC000000000001"
    + "000150050"
    + "USD"
    + "20240115"
    + "CRD"
    + "WIRE TRANSFER".ljust(45)
    + "JOHN DOE".ljust(50)
    + "0042"
)

FIS_JSON_MESSAGE = json.dumps({
    "transactionId": "TXN0002",
    "accountNumber": "ACC003",
    "amount": 320.0,
    "currency": "USD",
    "valueDate": "2024-01-16",
    "transactionType": "CRD",
    "description": "Card settlement",
    "customerName": "JOHN DOE",
    "branchCode": "0042",
})

FIS_DELIMITED_MESSAGE = "TXN0003|ACC004|1500.50|USD|20240115|CRD|WIRE TRANSFER|JOHN DOE|0042"

FISERV_DNA_MESSAGE = json.dumps({
    "transactionId": "DNA0001",
    "accountNumber": "ACC005",
    "amount": 75.25,
    "currency": "USD",
    "valueDate": "2024-01-17",
    "description": "ACH debit",
    "customerName": "JANE SMITH",
    "branchCode": "0007",
})

TEMENOS_JSON_MESSAGE = json.dumps({
    "header": {"messageId": "TMN0001", "system": "T24"},
    "transaction": {"amount": 2500.0, "currency": "EUR"},
    "debitAccount": "DE89370400440532013000",
    "creditAccount": "FR1420041010050500013M02606",
    "narrative": "Rent January",
})

TEMENOS_XML_MESSAGE = (
    "<TemenosTransaction>"
    "<TransactionReference>FT24015ABC</TransactionReference>"
    "<Amount>2500.00</Amount>"
    "<Currency>EUR</Currency>"
    "<ValueDate>20240115</ValueDate>"
    "<DebitAccount>ACC001</DebitAccount>"
    "<CreditAccount>ACC002</CreditAccount>"
    "<Narrative>Rent January</Narrative>"
    "</TemenosTransaction>"
)

TEMENOS_T24_MESSAGE = "\n".join([
    "TXN.REF=FT24015ABC",
    "AMOUNT=2500.00",
    "CURRENCY=EUR",
    "VALUE.DATE=20240115",
    "DEBIT.ACCT=ACC001",
    "CREDIT.ACCT=ACC002",
    "NARRATIVE=RENT=JANUARY",
    "CUSTOMER.NO=100234",
    "PRODUCT.CODE=FT",
])

COBOL_COPYBOOK = """       IDENTIFICATION DIVISION.
       PROGRAM-ID. PAYMENT.
       DATA DIVISION.
       01 PAYMENT-RECORD.
          05 PAY-AMOUNT PIC 9(9)V99.
"""


@pytest.fixture
def test_config():
    """Configuration with logging and metrics on, strict validation."""
    return ParserConfig(environment=Environment.TESTING)


@pytest.fixture
def parser(test_config):
    """Parsing façade built on the test configuration."""
    return SwiftParserOSS(config=test_config)


@pytest.fixture
def mt103_message():
    return MT103_MESSAGE


@pytest.fixture
def mt202_message():
    return MT202_MESSAGE


@pytest.fixture
def mt950_message():
    return MT950_MESSAGE


@pytest.fixture
def mt700_message():
    return MT700_MESSAGE


@pytest.fixture
def pacs008_message():
    return ISO20022_PACS008


@pytest.fixture
def cobol_copybook():
    return COBOL_COPYBOOK
