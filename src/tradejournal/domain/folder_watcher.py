"""Folder watcher that imports trade files dropped into a directory."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from tradejournal.domain.entities import (
    FileOutcome,
    ScanResult,
    WatcherOptions,
    WatcherState,
)
from tradejournal.domain.errors import (
    DomainError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
    file_size_out_of_range,
    unsupported_format,
)
from tradejournal.domain.events import (
    EventBus,
    FileDetectedEvent,
    FileErrorEvent,
    FileProcessedEvent,
)
from tradejournal.domain.trade_import import TradeImportService
from tradejournal.filesystem import FileSystem


logger = logging.getLogger(__name__)

PROCESSED_FOLDER_NAME = "Processed"
ERROR_FOLDER_NAME = "Errors"


@dataclass(frozen=True)
class _Session:
    """What a scan needs from one start() call, captured so a scan can
    finish on its own after stop()."""

    session_id: int
    folder: Path
    account_id: int
    options: WatcherOptions

    @property
    def allowed_extensions(self) -> set[str]:
        return {ext.lower() for ext in self.options.allowed_extensions}


class FolderWatcherService:
    """Periodically imports files from a watched folder.

    ``start`` arms a repeating timer; every tick runs ``scan_all``, which
    imports eligible files one at a time and moves each to the processed or
    error folder. A tick that fires while a scan is still running is
    skipped. ``start``/``stop`` may be called from any thread: the watcher
    state is guarded by a lock that is never held during file or database
    work.
    """

    def __init__(
        self,
        import_service: TradeImportService,
        event_bus: Optional[EventBus] = None,
        fs: Optional[FileSystem] = None,
    ):
        """Initialize folder watcher.

        Args:
            import_service: Service that imports each file
            event_bus: Bus for file notifications (defaults to the import service's)
            fs: Filesystem to watch (defaults to the import service's)
        """
        self.import_service = import_service
        self.event_bus = event_bus if event_bus is not None else import_service.event_bus
        self.fs = fs if fs is not None else import_service.fs

        self._lock = threading.Lock()
        self._scan_guard = threading.Lock()
        self._state = WatcherState()
        self._session: Optional[_Session] = None
        self._timer: Optional[threading.Timer] = None
        self._session_counter = 0

    # State
    @property
    def state(self) -> WatcherState:
        """Snapshot of the watcher state."""
        with self._lock:
            return replace(self._state)

    @property
    def is_watching(self) -> bool:
        with self._lock:
            return self._state.is_watching

    @property
    def current_path(self) -> Optional[str]:
        with self._lock:
            return self._state.current_path

    @property
    def current_account_id(self) -> Optional[int]:
        with self._lock:
            return self._state.current_account_id

    @property
    def last_check_time(self) -> Optional[datetime]:
        with self._lock:
            return self._state.last_check_time

    @property
    def processed_count(self) -> int:
        with self._lock:
            return self._state.processed_count

    @property
    def error_count(self) -> int:
        with self._lock:
            return self._state.error_count

    # Lifecycle
    def start(
        self, folder_path: str, account_id: int, options: Optional[WatcherOptions] = None
    ) -> ScanResult:
        """Start watching a folder and run one scan immediately.

        A watcher that is already running is stopped first.

        Args:
            folder_path: Directory to watch
            account_id: Account that imported trades belong to
            options: Watcher options (defaults apply when None)

        Returns:
            ScanResult of the initial scan

        Raises:
            ValidationError: If the path is empty or the interval is not positive
            NotFoundError: If the directory doesn't exist
        """
        if not folder_path:
            raise ValidationError("Folder path is not specified")
        if not self.fs.is_dir(folder_path):
            raise NotFoundError(f"Folder not found: {folder_path}")

        options = options or WatcherOptions()
        if options.interval_seconds <= 0:
            raise ValidationError("Watch interval must be positive")

        folder = Path(folder_path)
        if options.move_after_process:
            options = replace(
                options,
                processed_folder=options.processed_folder or str(folder / PROCESSED_FOLDER_NAME),
                error_folder=options.error_folder or str(folder / ERROR_FOLDER_NAME),
            )
            self.fs.make_dirs(options.processed_folder)
            self.fs.make_dirs(options.error_folder)

        with self._lock:
            self._stop_locked()
            self._session_counter += 1
            session = _Session(
                session_id=self._session_counter,
                folder=folder,
                account_id=account_id,
                options=options,
            )
            self._session = session
            self._state = WatcherState(
                is_watching=True,
                current_path=str(folder),
                current_account_id=account_id,
                options=options,
            )
            self._arm_timer_locked(session)

        logger.info(
            "Watching %s for account %d every %ss", folder, account_id, options.interval_seconds
        )
        return self.scan_all()

    def stop(self) -> None:
        """Stop watching. Safe to call when not watching.

        A scan that is already running finishes on its own.
        """
        with self._lock:
            was_watching = self._stop_locked()
        if was_watching:
            logger.info("Stopped watching")

    def close(self) -> None:
        self.stop()

    def __enter__(self) -> "FolderWatcherService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _stop_locked(self) -> bool:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        was_watching = self._session is not None
        self._session = None
        self._state = WatcherState()
        return was_watching

    def _arm_timer_locked(self, session: _Session) -> None:
        timer = threading.Timer(
            session.options.interval_seconds, self._on_tick, args=(session.session_id,)
        )
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _on_tick(self, session_id: int) -> None:
        with self._lock:
            session = self._session
            if session is None or session.session_id != session_id:
                return
            self._arm_timer_locked(session)

        if not self._scan_guard.acquire(blocking=False):
            logger.debug("Previous scan still running, skipping tick")
            return
        try:
            self._scan(session)
        except Exception:
            logger.exception("Scheduled scan of %s failed", session.folder)
        finally:
            self._scan_guard.release()

    # Scanning
    def scan_all(self) -> ScanResult:
        """Import every eligible file in the watched folder.

        Waits for a scan that is already running. Never raises; failures to
        list the folder are returned as a failed ScanResult.
        """
        with self._lock:
            session = self._session
        if session is None:
            return ScanResult(success=False, error=ValidationError("Watcher is not active"))

        with self._scan_guard:
            return self._scan(session)

    def process_file(self, file_path: str) -> FileOutcome:
        """Import one file and route it to the processed or error folder.

        Waits for a scan that is already running. Never raises; failures are
        reported in the returned FileOutcome and through a FileErrorEvent.
        """
        with self._lock:
            session = self._session
        if session is None:
            return FileOutcome(
                file_path=str(file_path),
                success=False,
                error=ValidationError("Watcher is not active"),
            )
        with self._scan_guard:
            return self._process(Path(file_path), session)

    def _scan(self, session: _Session) -> ScanResult:
        options = session.options
        try:
            candidates = self.fs.list_files(
                session.folder, options.file_filter, options.include_subfolders
            )
        except OSError as e:
            logger.warning("Could not list %s: %s", session.folder, e)
            return ScanResult(
                success=False,
                error=OperationFailedError(f"Could not list folder {session.folder}", str(e)),
            )

        allowed = session.allowed_extensions
        processed = 0
        for path in candidates:
            if path.suffix.lower() not in allowed or self._in_routing_folder(path, options):
                continue

            try:
                size = self.fs.size(path)
            except OSError:
                # Gone since listing
                continue

            self.event_bus.publish(
                FileDetectedEvent(file_path=str(path), file_size=size, detected_at=datetime.now())
            )
            if self._process(path, session).success:
                processed += 1

        with self._lock:
            if self._session is session:
                self._state.last_check_time = datetime.now()

        return ScanResult(success=True, processed_count=processed)

    def _process(self, path: Path, session: _Session) -> FileOutcome:
        options = session.options
        started = datetime.now()
        try:
            size = self.fs.size(path)
            if size < options.min_file_size or size > options.max_file_size:
                raise ValidationError(
                    file_size_out_of_range(size, options.min_file_size, options.max_file_size)
                )

            extension = path.suffix.lower()
            if extension not in session.allowed_extensions:
                raise ValidationError(unsupported_format(extension))

            result = self.import_service.import_file(
                str(path), session.account_id, options.import_options
            )

            if options.delete_after_process:
                self.fs.delete(path)
            elif options.move_after_process and options.processed_folder:
                self.fs.move(path, Path(options.processed_folder) / path.name)
        except DomainError as e:
            return self._fail(path, session, e, e)
        except Exception as e:
            logger.exception("Unexpected error while processing %s", path)
            return self._fail(path, session, OperationFailedError(f"Could not process file: {e}"), e)

        with self._lock:
            if self._session is session:
                self._state.processed_count += 1

        self.event_bus.publish(
            FileProcessedEvent(
                file_path=str(path),
                imported_count=result.success_count,
                skipped_count=result.skipped_count,
                duration=datetime.now() - started,
            )
        )
        return FileOutcome(
            file_path=str(path),
            success=True,
            imported_count=result.success_count,
            skipped_count=result.skipped_count,
        )

    def _fail(
        self, path: Path, session: _Session, error: DomainError, exc: BaseException
    ) -> FileOutcome:
        logger.warning("Failed to import %s: %s", path, error)
        options = session.options
        if options.move_after_process and options.error_folder and self.fs.exists(path):
            try:
                self.fs.move(path, Path(options.error_folder) / path.name)
            except OSError as e:
                logger.warning("Could not move %s to the error folder: %s", path, e)

        with self._lock:
            if self._session is session:
                self._state.error_count += 1

        self.event_bus.publish(
            FileErrorEvent(file_path=str(path), error_message=str(error), exception=exc)
        )
        return FileOutcome(file_path=str(path), success=False, error=error)

    @staticmethod
    def _in_routing_folder(path: Path, options: WatcherOptions) -> bool:
        for folder in (options.processed_folder, options.error_folder):
            if folder and Path(folder) in path.parents:
                return True
        return False
