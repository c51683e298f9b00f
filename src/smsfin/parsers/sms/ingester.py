"""
SMS inbox ingester.

Batch import of exported SMS messages (CSV or Excel), filtered to known bank
sender IDs and run through SMSParser. Results can be exported back to Excel
or CSV for review. Persistence of the parsed transactions is left to the
caller.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from smsfin.core.exceptions import IngestionError
from smsfin.parsers.sms.models import ParsedTransaction
from smsfin.parsers.sms.parser import DEFAULT_PARSER, SMSParser

logger = logging.getLogger(__name__)


# Sender IDs of banks and wallets whose SMS are worth parsing
DEFAULT_BANK_SENDERS: Tuple[str, ...] = (
    "HDFCBK", "ICICIB", "SBIINB", "AXISBK", "KOTAKB",
    "PAYTM", "PHONEPE", "GPAY", "AMAZONPAY",
    "YESBNK", "ILOBNK", "PNBSMS", "BOIIND", "CANBNK",
)

REQUIRED_COLUMNS = ("sender", "body")

EXPORT_COLUMNS = [
    "sender", "timestamp", "type", "amount", "merchant_name", "bank_name",
    "account_last4", "balance", "reference_number", "category_id",
    "category_label", "confidence",
]


@dataclass(frozen=True)
class SMSMessage:
    """A raw SMS as delivered by the device SMS reader."""

    sender: str
    body: str
    timestamp: Optional[str] = None


@dataclass
class ImportedTransaction:
    """A parsed transaction together with the SMS it came from."""

    message: SMSMessage
    transaction: ParsedTransaction

    def to_row(self) -> dict:
        txn = self.transaction
        return {
            "sender": self.message.sender,
            "timestamp": self.message.timestamp,
            "type": txn.transaction_type.value,
            "amount": txn.amount,
            "merchant_name": txn.merchant_name,
            "bank_name": txn.bank_name,
            "account_last4": txn.account_last4,
            "balance": txn.balance,
            "reference_number": txn.reference_number,
            "category_id": txn.category.category_id.value if txn.category else None,
            "category_label": txn.category.category_label if txn.category else None,
            "confidence": txn.category.confidence if txn.category else None,
        }


@dataclass
class ImportResult:
    """Result of ingesting a batch of SMS messages."""

    transactions: List[ImportedTransaction] = field(default_factory=list)
    skipped_senders: int = 0
    unparsed: int = 0
    warnings: List[str] = field(default_factory=list)
    source_file: str = ""

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    @property
    def total_messages(self) -> int:
        return len(self.transactions) + self.skipped_senders + self.unparsed

    @property
    def transaction_count(self) -> int:
        """Get number of transactions parsed."""
        return len(self.transactions)

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten parsed transactions into a DataFrame, one row each."""
        return pd.DataFrame([t.to_row() for t in self.transactions], columns=EXPORT_COLUMNS)


def is_bank_sender(sender: str, filters: Sequence[str] = DEFAULT_BANK_SENDERS) -> bool:
    """
    Check whether an SMS sender ID belongs to a known bank or wallet.

    Operator prefixes are common ("VM-HDFCBK", "AD-SBIINB"), so this is a
    case-insensitive containment test.
    """
    if not sender:
        return False
    sender_upper = sender.upper()
    return any(f.upper() in sender_upper for f in filters)


class SMSIngester:
    """Runs a batch of SMS messages through the parser."""

    def __init__(
        self,
        parser: SMSParser = DEFAULT_PARSER,
        sender_filters: Optional[Sequence[str]] = DEFAULT_BANK_SENDERS,
    ):
        """
        Initialize ingester.

        Args:
            parser: SMS parser to apply
            sender_filters: Bank sender IDs to accept; None accepts any sender
                (e.g. text pasted by the user)
        """
        self.parser = parser
        if isinstance(sender_filters, str):
            sender_filters = (sender_filters,)
        self.sender_filters = tuple(sender_filters) if sender_filters is not None else None

    def ingest(self, messages: Iterable[SMSMessage], source_file: str = "") -> ImportResult:
        """
        Parse every message from a known sender.

        Unparsable messages are counted, never raised.
        """
        result = ImportResult(source_file=source_file)

        for msg in messages:
            if self.sender_filters is not None and not is_bank_sender(msg.sender, self.sender_filters):
                logger.debug(f"SMS from non-bank sender, ignoring: {msg.sender}")
                result.skipped_senders += 1
                continue

            txn = self.parser.parse(msg.body)
            if txn is None:
                result.unparsed += 1
                result.add_warning(f"Could not parse SMS from {msg.sender}: {msg.body[:40]}")
                continue

            result.transactions.append(ImportedTransaction(message=msg, transaction=txn))

        logger.info(
            f"Ingested {result.transaction_count} of {result.total_messages} SMS "
            f"({result.skipped_senders} non-bank, {result.unparsed} unparsed)"
        )
        return result

    def ingest_file(self, file_path: Union[str, Path]) -> ImportResult:
        """Load an SMS export file and ingest it."""
        messages = load_messages(file_path)
        return self.ingest(messages, source_file=str(file_path))


def _read_frame(file_path: Path) -> pd.DataFrame:
    suffix = file_path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(file_path, dtype=str, keep_default_na=False)
    if suffix in (".xlsx", ".xls"):
        return pd.read_excel(file_path, dtype=str, keep_default_na=False)
    raise IngestionError(f"Unsupported format: {file_path.suffix}", source_file=str(file_path))


def load_messages(file_path: Union[str, Path]) -> List[SMSMessage]:
    """
    Load SMS messages from a CSV or Excel export.

    The file needs 'sender' and 'body' columns (case-insensitive); a
    'timestamp' column is optional.

    Raises:
        IngestionError: Missing file, unsupported format or missing columns
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise IngestionError(f"File not found: {file_path}", source_file=str(file_path))

    df = _read_frame(file_path)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise IngestionError(
            f"Missing column(s) {missing} in {file_path.name}", source_file=str(file_path)
        )

    has_timestamp = "timestamp" in df.columns
    messages = []
    for _, row in df.iterrows():
        body = str(row["body"])
        if not body.strip():
            continue
        messages.append(SMSMessage(
            sender=str(row["sender"]).strip(),
            body=body,
            timestamp=(str(row["timestamp"]) or None) if has_timestamp else None,
        ))

    logger.debug(f"Loaded {len(messages)} SMS from {file_path}")
    return messages


def export_transactions(result: ImportResult, output_path: Union[str, Path]) -> Path:
    """
    Write parsed transactions to Excel (.xlsx) or CSV.

    Decimal amounts are written as floats for spreadsheet use.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = result.to_dataframe()
    for col in ("amount", "balance"):
        df[col] = df[col].map(lambda v: float(v) if pd.notna(v) else None)

    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, index=False)
    elif output_path.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Transactions", index=False)
            if result.warnings:
                pd.DataFrame({"warning": result.warnings}).to_excel(
                    writer, sheet_name="Warnings", index=False
                )
    else:
        raise IngestionError(f"Unsupported export format: {output_path.suffix}")

    logger.info(f"Exported {result.transaction_count} transactions to {output_path}")
    return output_path
