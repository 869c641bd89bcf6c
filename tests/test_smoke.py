from pathlib import Path
from wordscan.cli import main


def test_smoke(tmp_path: Path, capsys):
    # Small project with the word as a token and as part of a longer one
    sample = tmp_path / "sample.txt"
    sample.write_text("TODO: ship it\nTODOS are not it\n")
    code = main([str(tmp_path), "TODO"])
    assert code == 0
    out = capsys.readouterr().out
    assert f"File: {sample}" in out
    assert "Line 1: TODO: ship it" in out
    assert "Line 2" not in out
