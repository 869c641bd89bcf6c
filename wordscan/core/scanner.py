from __future__ import annotations

import logging
import os
import stat
import time
from typing import BinaryIO, List, Optional

from tqdm import tqdm

from .diagnostics import collect_file_diagnostic, format_file_diagnostic
from .errors import (
    BufferGrowthError,
    FileOpenError,
    PathTooLongError,
    TraversalError,
    describe_os_error,
)
from .matcher import find_whole_word
from .models import EntryKind, FileEntry, MatchRecord, ScanContext, ScanStats
from .reader import INITIAL_BUFFER_SIZE, LineReader
from .reporting import MatchReporter


DEFAULT_LOGGER_NAME = "wordscan"
MAX_PATH_LENGTH = 4096
SLOW_SCAN_THRESHOLD_SECONDS = 2.0


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Diagnostics are written to stderr so that stdout carries only the match
    report. ``verbose`` lowers the threshold from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


def join_path(parent: str, name: str) -> str:
    if parent.endswith(os.sep):
        return parent + name
    return parent + os.sep + name


def classify_mode(mode: int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    return EntryKind.OTHER


class FileScanner:
    """Scans one regular file at a time for whole-word matches."""

    def __init__(
        self,
        ctx: ScanContext,
        *,
        reporter: Optional[MatchReporter] = None,
        logger: Optional[logging.Logger] = None,
        stats: Optional[ScanStats] = None,
        initial_buffer_size: int = INITIAL_BUFFER_SIZE,
        max_buffer_size: Optional[int] = None,
    ) -> None:
        self.ctx = ctx
        self.reporter = reporter or MatchReporter()
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.stats = stats if stats is not None else ScanStats()
        self.initial_buffer_size = initial_buffer_size
        self.max_buffer_size = max_buffer_size
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def _open(self, path: str) -> BinaryIO:
        try:
            return open(path, "rb")
        except OSError as exc:
            reason = describe_os_error(exc)
            try:
                diagnostic = collect_file_diagnostic(path)
            except OSError as stat_exc:
                raise FileOpenError(path, reason, diagnostic_error=describe_os_error(stat_exc)) from exc
            raise FileOpenError(path, reason, diagnostic=diagnostic) from exc

    def _report_open_failure(self, exc: FileOpenError) -> None:
        self.stats.errors += 1
        if exc.diagnostic is not None:
            self.logger.error("%s\n%s", exc, format_file_diagnostic(exc.diagnostic))
        else:
            self.logger.error(
                "%s (file attributes unavailable: %s)", exc, exc.diagnostic_error
            )

    def scan(self, path: str) -> int:
        """Scan ``path`` and return the number of matching lines reported."""
        try:
            handle = self._open(path)
        except FileOpenError as exc:
            self._report_open_failure(exc)
            return 0

        self.stats.files_scanned += 1
        reader = LineReader(self.initial_buffer_size, self.max_buffer_size)
        word = self.ctx.word_bytes
        matched = 0
        line_count = 0
        start_time = time.perf_counter()
        try:
            with handle:
                for line_number, line in enumerate(reader.lines(handle), start=1):
                    line_count = line_number
                    if find_whole_word(line, word, self.ctx.case_insensitive) < 0:
                        continue
                    if not matched:
                        self.reporter.file_header(path)
                    self.reporter.match(MatchRecord(path, line_number, line))
                    matched += 1
        except BufferGrowthError as exc:
            self.stats.errors += 1
            self.logger.error("Aborting scan of %s at line %d: %s", path, line_count + 1, exc)
        except OSError as exc:
            self.stats.errors += 1
            self.logger.error("Error reading %s: %s", path, describe_os_error(exc))
        finally:
            reader.release()
            self.reporter.flush()
            self._maybe_log_slow_file(path, time.perf_counter() - start_time, line_count)

        if matched:
            self.stats.files_matched += 1
            self.stats.lines_matched += matched
        return matched

    def _maybe_log_slow_file(self, path: str, duration: float, line_count: int) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        if duration < self._slow_log_threshold:
            return
        self.logger.debug("Slow scan for %s took %.2fs (%d lines)", path, duration, line_count)


class TreeWalker:
    """Depth-first walk of a directory tree feeding regular files to a FileScanner.

    Entries are classified with ``os.lstat`` so symbolic links are never
    followed: a link to a directory is neither recursed into nor scanned.
    Unreadable directories and entries are logged and skipped.
    """

    def __init__(
        self,
        ctx: ScanContext,
        *,
        reporter: Optional[MatchReporter] = None,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
        show_progress: bool = False,
        progress_desc: str = "Scanning files",
        max_path_length: int = MAX_PATH_LENGTH,
        initial_buffer_size: int = INITIAL_BUFFER_SIZE,
        max_buffer_size: Optional[int] = None,
    ) -> None:
        self.ctx = ctx
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        if verbose:
            self.logger.setLevel(logging.INFO)
        self.show_progress = bool(show_progress)
        self.progress_desc = progress_desc
        self.max_path_length = max_path_length
        self.stats = ScanStats()
        self.file_scanner = FileScanner(
            ctx,
            reporter=reporter,
            logger=base_logger,
            stats=self.stats,
            initial_buffer_size=initial_buffer_size,
            max_buffer_size=max_buffer_size,
        )
        self._progress_bar = None

    def run(self, root: str) -> ScanStats:
        """Walk ``root`` and return the counters gathered along the way."""
        progress_bar = None
        if self.show_progress:
            progress_bar = tqdm(desc=self.progress_desc, unit="file")
        try:
            self._progress_bar = progress_bar
            self.walk(root)
        finally:
            if progress_bar is not None:
                progress_bar.close()
            self._progress_bar = None

        self.logger.info(
            "Scanned %d file(s) in %d director(ies): %d matching line(s) in %d file(s), %d error(s)",
            self.stats.files_scanned,
            self.stats.directories,
            self.stats.lines_matched,
            self.stats.files_matched,
            self.stats.errors,
        )
        return self.stats

    def walk(self, path: str) -> None:
        try:
            names = self._list_directory(path)
        except TraversalError as exc:
            self._report(exc)
            return

        self.stats.directories += 1
        if self.verbose:
            self.logger.info("Entering %s (%d entries)", path, len(names))

        for name in names:
            try:
                entry = self._classify(path, name)
            except TraversalError as exc:
                self._report(exc)
                continue

            if entry.kind is EntryKind.DIRECTORY:
                self.walk(entry.path)
            elif entry.kind is EntryKind.REGULAR_FILE:
                self._scan_file(entry.path)
            elif self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug("Skipping non-regular entry %s", entry.path)

    def _list_directory(self, path: str) -> List[str]:
        # Names are collected up front so no directory handle stays open
        # while descending into subdirectories.
        try:
            with os.scandir(path) as it:
                return [entry.name for entry in it]
        except OSError as exc:
            raise TraversalError(path, describe_os_error(exc), action="Cannot open directory") from exc

    def _classify(self, parent: str, name: str) -> FileEntry:
        child = join_path(parent, name)
        if len(os.fsencode(child)) >= self.max_path_length:
            raise PathTooLongError(child, self.max_path_length)
        try:
            st = os.lstat(child)
        except OSError as exc:
            raise TraversalError(child, describe_os_error(exc)) from exc
        return FileEntry(path=child, kind=classify_mode(st.st_mode))

    def _scan_file(self, path: str) -> None:
        self.file_scanner.scan(path)
        if self._progress_bar is not None:
            label = path
            if len(label) > 60:
                label = f"...{label[-57:]}"
            self._progress_bar.set_postfix_str(label, refresh=False)
            self._progress_bar.update(1)

    def _report(self, exc: TraversalError) -> None:
        self.stats.errors += 1
        self.logger.error("%s", exc)
