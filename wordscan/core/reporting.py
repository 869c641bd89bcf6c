from __future__ import annotations
import os
import sys
from typing import BinaryIO, Optional

from .models import MatchRecord, ScanContext


class MatchReporter:
    """Writes the textual match report to a binary stream (stdout by default).

    Matching lines are written as the raw bytes read from disk, so files in
    any encoding come out unchanged.
    """

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout.buffer

    def banner(self, ctx: ScanContext, directory: str) -> None:
        text = f"Searching '{ctx.search_word}' in directory: {directory} ({ctx.mode_label})\n"
        self.stream.write(os.fsencode(text))
        self.stream.flush()

    def file_header(self, path: str) -> None:
        self.stream.write(b"\nFile: " + os.fsencode(path) + b"\n")

    def match(self, record: MatchRecord) -> None:
        self.stream.write(b"Line %d: " % record.line_number + record.line_text)

    def flush(self) -> None:
        self.stream.flush()
