"""Trade import domain service."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

from tradejournal.database.base import Database
from tradejournal.domain.duplicates import DuplicateDetector
from tradejournal.domain.entities import (
    MAX_IMPORT_FILE_SIZE,
    ImportOptions,
    ImportPreview,
    ImportResult,
)
from tradejournal.domain.errors import (
    NotFoundError,
    OperationFailedError,
    ValidationError,
    account_not_found,
    file_size_out_of_range,
    unsupported_format,
)
from tradejournal.domain.events import EventBus, TradesImportedEvent
from tradejournal.domain.field_mapping import (
    DEFAULT_FIELD_MAPPING,
    SYMBOL,
    column_key,
    effective_mapping,
    suggest_mapping,
    validate_mapping,
)
from tradejournal.domain.parsing import ParsedRows, parse_csv_text, parse_json_text
from tradejournal.domain.record_builder import apply_auto_tag, build_trade
from tradejournal.filesystem import FileSystem, LocalFileSystem


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".json")
PREVIEW_ROWS = 5


class TradeImportService:
    """Service for importing trade history from CSV and JSON.

    Each call is an independent unit of work: rows are parsed, mapped onto
    canonical fields, checked for duplicates and staged, then committed
    together. Row problems are collected in the ImportResult; problems with
    the input as a whole raise a DomainError and nothing is saved.
    """

    def __init__(
        self,
        db: Database,
        event_bus: Optional[EventBus] = None,
        fs: Optional[FileSystem] = None,
    ):
        """Initialize trade import service.

        Args:
            db: Database instance
            event_bus: Bus for TradesImportedEvent notifications
            fs: Filesystem to read input files from (local disk by default)
        """
        self.db = db
        self.event_bus = event_bus if event_bus is not None else EventBus()
        self.fs = fs if fs is not None else LocalFileSystem()
        self.duplicate_detector = DuplicateDetector(db)

    def default_mapping(self) -> Mapping[str, str]:
        """Return the built-in source column synonym table."""
        return DEFAULT_FIELD_MAPPING

    def supports_format(self, extension: str) -> bool:
        """Return True for file extensions the importer can read."""
        return extension.lower() in SUPPORTED_EXTENSIONS

    def validate_file(self, file_path: str) -> None:
        """Check that a file can be imported.

        Raises:
            ValidationError: If the path is empty, the extension is unsupported
                or the size is not within (0, 100 MiB]
            NotFoundError: If the file doesn't exist
        """
        if not file_path:
            raise ValidationError("File path is not specified")

        if not self.fs.exists(file_path) or self.fs.is_dir(file_path):
            raise NotFoundError(f"File not found: {file_path}")

        extension = Path(file_path).suffix.lower()
        if not self.supports_format(extension):
            raise ValidationError(unsupported_format(extension))

        size = self.fs.size(file_path)
        if size <= 0:
            raise ValidationError("File is empty")
        if size > MAX_IMPORT_FILE_SIZE:
            raise ValidationError(file_size_out_of_range(size, 0, MAX_IMPORT_FILE_SIZE))

    def import_file(
        self, file_path: str, account_id: int, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """Import a CSV or JSON file, chosen by its extension."""
        extension = Path(file_path).suffix.lower()
        if extension == ".json":
            return self.import_json(file_path, account_id, options)
        if extension == ".csv":
            return self.import_csv(file_path, account_id, options)
        # Let validation produce the appropriate error for the path
        self.validate_file(file_path)
        raise ValidationError(unsupported_format(extension))

    def import_csv(
        self, file_path: str, account_id: int, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """Import trades from a CSV file.

        Args:
            file_path: Path to CSV file
            account_id: Account to import into
            options: Import options (defaults apply when None)

        Returns:
            ImportResult with counts, row errors and imported records

        Raises:
            ValidationError: If the file or options are invalid
            NotFoundError: If the file or account doesn't exist
            OperationFailedError: If the file cannot be read or saving fails
        """
        text = self._read_file(file_path)
        return self.import_csv_text(text, account_id, options)

    def import_json(
        self, file_path: str, account_id: int, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """Import trades from a JSON file holding an array of objects.

        Raises the same errors as ``import_csv``.
        """
        text = self._read_file(file_path)
        return self.import_json_text(text, account_id, options)

    def import_csv_text(
        self, csv_text: str, account_id: int, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """Import trades from CSV text."""
        options = self._prepare(account_id, options)
        start_time = datetime.now()
        parsed = parse_csv_text(csv_text, options.has_header, options.csv_delimiter)
        return self._import_rows(parsed, account_id, options, start_time)

    def import_json_text(
        self, json_text: str, account_id: int, options: Optional[ImportOptions] = None
    ) -> ImportResult:
        """Import trades from JSON text."""
        options = self._prepare(account_id, options)
        start_time = datetime.now()
        parsed = parse_json_text(json_text)
        return self._import_rows(parsed, account_id, options, start_time)

    def preview(self, file_path: str, options: Optional[ImportOptions] = None) -> ImportPreview:
        """Describe what importing a file would see, without saving anything.

        Returns:
            ImportPreview with detected columns, up to five sample rows, the row
            count, a suggested mapping and warnings
        """
        options = options or ImportOptions()
        text = self._read_file(file_path)
        parsed = self._parse(text, Path(file_path).suffix.lower(), options)

        preview = ImportPreview(
            detected_columns=list(parsed.columns),
            sample_data=[dict(row) for row in parsed.rows[:PREVIEW_ROWS]],
            total_rows=len(parsed),
            suggested_mapping=suggest_mapping(parsed.columns),
        )

        if options.column_mapping:
            known = {column_key(column) for column in parsed.columns}
            for source in options.column_mapping:
                if column_key(source) not in known:
                    preview.warnings.append(f"Mapped column '{source}' not found in file")
        elif SYMBOL not in preview.suggested_mapping.values():
            preview.warnings.append("No column maps to Symbol; every row would be rejected")

        if not parsed.rows:
            preview.warnings.append("File has no data rows")

        return preview

    def _parse(self, text: str, extension: str, options: ImportOptions) -> ParsedRows:
        if extension == ".json":
            return parse_json_text(text)
        return parse_csv_text(text, options.has_header, options.csv_delimiter)

    def _read_file(self, file_path: str) -> str:
        self.validate_file(file_path)
        try:
            return self.fs.read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            raise OperationFailedError(f"Could not read file {file_path}", details=str(e)) from e

    def _prepare(self, account_id: int, options: Optional[ImportOptions]) -> ImportOptions:
        options = options or ImportOptions()
        if options.max_errors < 0:
            raise ValidationError("max_errors must not be negative")
        if options.column_mapping:
            validate_mapping(options.column_mapping)
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return options

    def _import_rows(
        self,
        parsed: ParsedRows,
        account_id: int,
        options: ImportOptions,
        start_time: datetime,
    ) -> ImportResult:
        result = ImportResult(start_time=start_time, total_rows=len(parsed))
        mapping = effective_mapping(options.column_mapping)

        try:
            for row, row_number in zip(parsed.rows, parsed.row_numbers):
                if len(result.errors) >= options.max_errors and not options.ignore_errors:
                    logger.info(
                        "Stopping import after %d errors at row %d",
                        len(result.errors),
                        row_number,
                    )
                    break

                outcome = build_trade(row, mapping, account_id, options, row_number)
                if not outcome.ok:
                    result.errors.append(outcome.error)
                    continue

                record = outcome.record
                if options.skip_duplicates and self.duplicate_detector.is_duplicate(record):
                    result.skipped_count += 1
                    continue

                record = apply_auto_tag(record, options.auto_tag)
                self.db.add_trade(record)
                result.imported_records.append(record)
                result.success_count += 1

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        result.end_time = datetime.now()
        logger.info(
            "Imported %d trades into account %d (%d skipped, %d errors, %d rows)",
            result.success_count,
            account_id,
            result.skipped_count,
            result.error_count,
            result.total_rows,
        )

        if result.success_count > 0:
            self.event_bus.publish(TradesImportedEvent(result.success_count, account_id))

        return result
