from __future__ import annotations
import enum
import os
from dataclasses import dataclass, field


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    REGULAR_FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class ScanContext:
    search_word: str
    case_insensitive: bool = False
    word_bytes: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Lines are matched as raw bytes; encode the word the same way paths are.
        object.__setattr__(self, "word_bytes", os.fsencode(self.search_word))

    @property
    def mode_label(self) -> str:
        return "case-insensitive" if self.case_insensitive else "case-sensitive"


@dataclass
class FileEntry:
    path: str
    kind: EntryKind


@dataclass
class MatchRecord:
    file_path: str
    line_number: int
    line_text: bytes


@dataclass
class FileDiagnostic:
    file_path: str
    permission_bits: int
    owner_name: str
    group_name: str
    size_bytes: int


@dataclass
class ScanStats:
    directories: int = 0
    files_scanned: int = 0
    files_matched: int = 0
    lines_matched: int = 0
    errors: int = 0
