from __future__ import annotations
import grp
import os
import pwd
import stat
from typing import List, Optional

from .models import FileDiagnostic

UNKNOWN = "unknown"


def _owner_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name or UNKNOWN
    except KeyError:
        return UNKNOWN


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name or UNKNOWN
    except KeyError:
        return UNKNOWN


def collect_file_diagnostic(path: str, st: Optional[os.stat_result] = None) -> FileDiagnostic:
    """Snapshot the metadata an operator needs for a file that failed to open.

    ``st`` defaults to ``os.lstat(path)``; an ``OSError`` from that call is left
    to the caller.
    """
    if st is None:
        st = os.lstat(path)
    return FileDiagnostic(
        file_path=path,
        permission_bits=stat.S_IMODE(st.st_mode) & 0o777,
        owner_name=_owner_name(st.st_uid),
        group_name=_group_name(st.st_gid),
        size_bytes=st.st_size,
    )


def format_file_diagnostic(diag: FileDiagnostic) -> str:
    lines: List[str] = [
        f"Attributes of '{diag.file_path}':",
        f"  Permissions: {diag.permission_bits:03o}",
        f"  Owner: {diag.owner_name}",
        f"  Group: {diag.group_name}",
        f"  Size: {diag.size_bytes} bytes",
    ]
    return "\n".join(lines)
