"""CLI tests for the dts2scala entry point.

Test cases live in cli/*.tests files. Format:

    === test name
    args: --package geo
    declaration source here
    (stdin for the converter)
    ---
    exit: 0
    stdout-contains: object Geo extends js.Object {
    stderr-empty: true
    ---

Special directives in the input section:
    args:           CLI arguments (first line, required)
    stdin-bytes:    hex-encoded raw bytes instead of text (e.g. "ff fe")

Assertion directives in the expected section:
    exit:             exact exit code
    stderr:           exact stderr content (trailing newline stripped)
    stderr-contains:  stderr must contain substring
    stderr-empty:     stderr must be empty
    stdout-contains:  stdout must contain substring
    stdout-empty:     stdout must be empty

File and directory arguments are covered by the in-process tests below.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from dts2scala.cli import main

CLI_DIR = Path(__file__).parent / "cli"
SRC_DIR = Path(__file__).parent.parent / "src"


def parse_cli_test_file(path: Path) -> list[tuple[str, dict]]:
    """Parse a .tests file into (name, case) tuples.

    Each case dict has keys: args, stdin, stdin_bytes, assertions.
    """
    lines = path.read_text().split("\n")
    result: list[tuple[str, dict]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            case = _parse_case(input_lines, expected_lines)
            result.append((test_name, case))
        else:
            i += 1
    return result


def _parse_case(input_lines: list[str], expected_lines: list[str]) -> dict:
    """Parse input + expected lines into a test case dict."""
    case: dict = {
        "args": [],
        "stdin": None,
        "stdin_bytes": None,
        "assertions": [],
    }
    body_start = 0
    if input_lines and input_lines[0].startswith("args:"):
        args_str = input_lines[0][5:].strip()
        case["args"] = args_str.split() if args_str else []
        body_start = 1

    remaining = input_lines[body_start:]
    if remaining and remaining[0].startswith("stdin-bytes:"):
        hex_str = remaining[0][len("stdin-bytes:") :].strip()
        case["stdin_bytes"] = bytes.fromhex(hex_str)
    else:
        case["stdin"] = "\n".join(remaining)

    for line in expected_lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith("exit:"):
            case["assertions"].append(("exit", int(line[5:].strip())))
        elif line.startswith("stderr:"):
            case["assertions"].append(("stderr", line[7:].strip()))
        elif line.startswith("stderr-contains:"):
            case["assertions"].append(("stderr-contains", line[16:].strip()))
        elif line.startswith("stderr-empty:"):
            case["assertions"].append(("stderr-empty", None))
        elif line.startswith("stdout-contains:"):
            case["assertions"].append(("stdout-contains", line[16:].strip()))
        elif line.startswith("stdout-empty:"):
            case["assertions"].append(("stdout-empty", None))
    return case


def discover_cli_tests() -> list[tuple[str, dict]]:
    """Find all CLI tests across .tests files."""
    results = []
    for test_file in sorted(CLI_DIR.glob("*.tests")):
        for name, case in parse_cli_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", case))
    return results


def run_cli(case: dict) -> subprocess.CompletedProcess[bytes]:
    """Run the dts2scala module from a test case."""
    cmd = [sys.executable, "-m", "dts2scala", *case["args"]]
    if case["stdin_bytes"] is not None:
        stdin_data = case["stdin_bytes"]
    elif case["stdin"] is not None:
        stdin_data = case["stdin"].encode()
    else:
        stdin_data = b""
    env = dict(os.environ)
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(cmd, input=stdin_data, capture_output=True, env=env)


def check_assertions(result: subprocess.CompletedProcess[bytes], assertions: list[tuple]) -> None:
    """Check all assertions against a CLI result."""
    for kind, value in assertions:
        if kind == "exit":
            assert result.returncode == value, (
                f"expected exit {value}, got {result.returncode}"
                f"\nstderr: {result.stderr.decode(errors='replace')}"
            )
        elif kind == "stderr":
            actual = result.stderr.decode(errors="replace").rstrip("\n")
            assert actual == value, f"expected stderr {value!r}, got {actual!r}"
        elif kind == "stderr-contains":
            actual = result.stderr.decode(errors="replace")
            assert value in actual, f"expected stderr to contain {value!r}, got {actual!r}"
        elif kind == "stderr-empty":
            assert result.stderr == b"", f"expected empty stderr, got {result.stderr!r}"
        elif kind == "stdout-contains":
            actual = result.stdout.decode(errors="replace")
            assert value in actual, f"expected stdout to contain {value!r}, got {actual!r}"
        elif kind == "stdout-empty":
            assert result.stdout == b"", f"expected empty stdout, got {result.stdout[:200]!r}"


def pytest_generate_tests(metafunc):
    """Parametrize test_cli over all .tests files."""
    if "cli_case" in metafunc.fixturenames:
        tests = discover_cli_tests()
        params = [pytest.param(case, id=test_id) for test_id, case in tests]
        metafunc.parametrize("cli_case", params)


def test_cli(cli_case: dict) -> None:
    """Run a single CLI test case from .tests file."""
    result = run_cli(cli_case)
    check_assertions(result, cli_case["assertions"])


# ---------------------------------------------------------------------------
# Files and directories
# ---------------------------------------------------------------------------


def test_file_to_file(tmp_path: Path, capsys):
    source = tmp_path / "my-lib.d.ts"
    source.write_text("declare function hello(): string;\n")
    target = tmp_path / "out.scala"
    assert main([str(source), "-o", str(target)]) == 0
    text = target.read_text()
    assert "package `my_lib` {" not in text
    assert "package my_lib {" in text
    assert "  def hello(): String = js.native" in text
    assert capsys.readouterr().out == ""


def test_missing_input_file(tmp_path: Path, capsys):
    assert main([str(tmp_path / "absent.d.ts")]) == 1
    assert "error: cannot open" in capsys.readouterr().err


def test_batch_with_arguments(tmp_path: Path, capsys):
    src = tmp_path / "in"
    src.mkdir()
    (src / "a.d.ts").write_text("declare const a: number;\n")
    (src / "b.d.ts").write_text("interface {\n")
    out = tmp_path / "out"
    assert main(["--batch", str(src), str(out)]) == 1
    captured = capsys.readouterr()
    assert "Converted: a.d.ts.scala" in captured.out
    assert "Conversion complete: 1/2 files converted successfully." in captured.out
    assert "b.d.ts" in captured.err
    assert (out / "a.d.ts.scala").exists()


def test_batch_from_environment(tmp_path: Path, capsys, monkeypatch):
    src = tmp_path / "samples"
    src.mkdir()
    (src / "x.d.ts").write_text("declare const x: string;\n")
    monkeypatch.setenv("INPUT_FOLDER", str(src))
    monkeypatch.setenv("OUTPUT_FOLDER", str(tmp_path / "output"))
    assert main(["--batch"]) == 0
    assert "Conversion complete: 1/1 files converted successfully." in capsys.readouterr().out
    assert (tmp_path / "output" / "x.d.ts.scala").exists()


def test_batch_empty_directory(tmp_path: Path, capsys):
    assert main(["--batch", str(tmp_path), str(tmp_path / "out")]) == 0
    assert "No .d.ts files found in the input folder." in capsys.readouterr().out


def test_batch_rejects_output_flag(tmp_path: Path, capsys):
    assert main(["--batch", "-o", "x.scala"]) == 2
    assert "do not apply to --batch" in capsys.readouterr().err
