from __future__ import annotations

import ast
import difflib
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"
EXPECTED_MARKER = "# =>"


def _example_scripts() -> list[Path]:
    scripts = sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))
    assert scripts, f"No example scripts found under {EXAMPLES_ROOT}"
    return scripts


def _expected_stdout(path: Path) -> list[str]:
    """Collect the ``# =>`` comment closing each ``print()`` call, in source order."""
    source = path.read_text(encoding="utf-8")
    lines = source.splitlines()
    calls = sorted(
        (
            node
            for node in ast.walk(ast.parse(source, filename=str(path)))
            if isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "print"
        ),
        key=lambda node: (node.lineno, node.col_offset),
    )

    expected: list[str] = []
    for call in calls:
        closing_line = lines[(call.end_lineno or call.lineno) - 1]
        assert EXPECTED_MARKER in closing_line, (
            f"{path}:{call.end_lineno}: print() must end with '{EXPECTED_MARKER} <output>'"
        )
        expected.append(closing_line.split(EXPECTED_MARKER, maxsplit=1)[1].strip())
    return expected


@pytest.mark.parametrize(
    "script",
    _example_scripts(),
    ids=lambda path: str(path.relative_to(REPO_ROOT)),
)
def test_example_stdout_matches_inline_expectations(script: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        item for item in (str(SRC_ROOT), env.get("PYTHONPATH")) if item
    )

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(script)],
        cwd=script.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    expected = _expected_stdout(script)
    actual = completed.stdout.splitlines()
    diff = "\n".join(
        difflib.unified_diff(expected, actual, fromfile="expected", tofile="actual", lineterm=""),
    )
    assert completed.returncode == 0, f"{script} failed:\n{completed.stderr}"
    assert completed.stderr == "", completed.stderr
    assert actual == expected, f"Output mismatch for {script}:\n{diff}"
