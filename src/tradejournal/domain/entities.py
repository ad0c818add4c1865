"""Domain model entities for tradejournal.

These are pure data classes representing trading concepts, independent of
database schema. Import options, results and watcher state live here too so
that the import pipeline and the folder watcher share one vocabulary.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional

from tradejournal.domain.errors import DomainError


MAX_IMPORT_FILE_SIZE = 100 * 1024 * 1024


class TradeDirection(str, Enum):
    """Side of a trade."""

    BUY = "Buy"
    SELL = "Sell"


class ImportErrorKind(str, Enum):
    """Category of a row-level import error."""

    PARSE_ERROR = "ParseError"
    MISSING_REQUIRED = "MissingRequired"
    INVALID_VALUE = "InvalidValue"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Account:
    """Trading account domain entity."""

    id: int
    name: str
    broker: str
    created_at: datetime


@dataclass(frozen=True)
class TradeRecord:
    """Canonical trade record.

    Built from one imported row and handed to storage. ``id`` stays None
    until the record has been read back from the database.
    """

    account_id: int
    symbol: str
    entry_time: datetime
    direction: TradeDirection = TradeDirection.BUY
    volume: Decimal = Decimal("0")
    entry_price: Decimal = Decimal("0")
    exit_price: Optional[Decimal] = None
    exit_time: Optional[datetime] = None
    stop_loss: Optional[Decimal] = None
    take_profit: Optional[Decimal] = None
    profit_loss: Optional[Decimal] = None
    commission: Decimal = Decimal("0")
    swap: Decimal = Decimal("0")
    notes: Optional[str] = None
    tags: Optional[str] = None
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def is_closed(self) -> bool:
        """A trade is closed exactly when it has an exit price."""
        return self.exit_price is not None

    def with_tag(self, tag: str) -> "TradeRecord":
        """Return a copy with ``tag`` appended to the comma-separated tags."""
        tags = tag if not self.tags else f"{self.tags},{tag}"
        return replace(self, tags=tags)


@dataclass(frozen=True)
class Fingerprint:
    """Identity of a logically duplicate trade."""

    account_id: int
    symbol: str
    entry_time: datetime
    entry_price: Decimal

    @classmethod
    def of(cls, record: TradeRecord) -> "Fingerprint":
        return cls(
            account_id=record.account_id,
            symbol=record.symbol,
            entry_time=record.entry_time,
            entry_price=record.entry_price,
        )


@dataclass(frozen=True)
class ImportOptions:
    """Options controlling a single import call."""

    has_header: bool = True
    csv_delimiter: str = ","
    date_format: str = "%Y-%m-%d %H:%M:%S"
    skip_duplicates: bool = True
    ignore_errors: bool = False
    max_errors: int = 100
    auto_tag: Optional[str] = None
    column_mapping: Optional[Mapping[str, str]] = None


@dataclass(frozen=True)
class ImportRowError:
    """A failure scoped to one input row."""

    row_number: int
    message: str
    kind: ImportErrorKind = ImportErrorKind.UNKNOWN
    column_name: Optional[str] = None
    raw_value: Optional[str] = None

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.message}"


@dataclass
class ImportResult:
    """Outcome of one import call."""

    start_time: datetime
    end_time: Optional[datetime] = None
    total_rows: int = 0
    success_count: int = 0
    skipped_count: int = 0
    errors: list[ImportRowError] = field(default_factory=list)
    imported_records: list[TradeRecord] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def duration(self) -> timedelta:
        if self.end_time is None:
            return timedelta(0)
        return self.end_time - self.start_time


@dataclass
class ImportPreview:
    """What an import of a file would see, without importing anything."""

    detected_columns: list[str] = field(default_factory=list)
    sample_data: list[dict[str, str]] = field(default_factory=list)
    total_rows: int = 0
    suggested_mapping: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WatcherOptions:
    """Folder watcher configuration."""

    interval_seconds: float = 60
    file_filter: str = "*"
    allowed_extensions: tuple[str, ...] = (".csv", ".json")
    delete_after_process: bool = False
    move_after_process: bool = True
    processed_folder: Optional[str] = None
    error_folder: Optional[str] = None
    include_subfolders: bool = False
    min_file_size: int = 0
    max_file_size: int = MAX_IMPORT_FILE_SIZE
    import_options: Optional[ImportOptions] = None


@dataclass
class WatcherState:
    """Mutable state of a folder watcher session."""

    is_watching: bool = False
    current_path: Optional[str] = None
    current_account_id: Optional[int] = None
    last_check_time: Optional[datetime] = None
    processed_count: int = 0
    error_count: int = 0
    options: WatcherOptions = field(default_factory=WatcherOptions)


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one file from a watched folder."""

    file_path: str
    success: bool
    imported_count: int = 0
    skipped_count: int = 0
    error: Optional[DomainError] = None


@dataclass(frozen=True)
class ScanResult:
    """Result of one pass over a watched folder."""

    success: bool
    processed_count: int = 0
    error: Optional[DomainError] = None
