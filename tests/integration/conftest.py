import os
import sys
import subprocess
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


def run_cli(args, cwd=None, env=None, timeout=60):
    """
    Run the CLI as a subprocess: python -m wordscan.cli <args>
    Returns CompletedProcess with raw stdout/stderr bytes captured.
    """
    cmd = [sys.executable, "-m", "wordscan.cli"] + list(map(str, args))
    full_env = dict(os.environ if env is None else env)
    full_env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(REPO_ROOT), full_env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(cmd, cwd=cwd, env=full_env, capture_output=True, timeout=timeout)


def assert_exit_ok(proc):
    assert proc.returncode == 0, f"Non-zero exit:\nSTDOUT:\n{proc.stdout!r}\nSTDERR:\n{proc.stderr!r}"


@pytest.fixture()
def dataset_dir(tmp_path: Path) -> Path:
    """
    A small tree: nested directories, a long line, a file without a trailing
    newline and a file in a non-UTF-8 encoding.
    """
    root = tmp_path / "dataset"
    (root / "docs" / "drafts").mkdir(parents=True)
    (root / "src").mkdir()
    (root / "a.txt").write_bytes(b"cats are nice\ncat\ncategory\n")
    (root / "docs" / "NOTES").write_bytes(b"see Readme for details\n")
    (root / "docs" / "drafts" / "long.txt").write_bytes(b"y" * 10_000 + b" cat\n")
    (root / "src" / "tail.c").write_bytes(b"int x;\n/* cat */")
    (root / "src" / "latin1.txt").write_bytes("caf\xe9 cat\n".encode("latin-1"))
    return root


def files_reported(stdout: bytes):
    return [line[len(b"File: "):] for line in stdout.splitlines() if line.startswith(b"File: ")]
