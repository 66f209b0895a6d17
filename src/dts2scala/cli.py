"""dts2scala CLI — convert one declaration file, or a whole directory tree."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from . import convert
from .batch import convert_directory, package_name_for
from .errors import ConvertError, ParseError

USAGE: str = """\
dts2scala [OPTIONS] [INPUT] [-o OUTPUT]
dts2scala --batch [INPUT_DIR] [OUTPUT_DIR]

Convert TypeScript declaration files (.d.ts) to Scala.js facades.

Options:
  --package NAME      Scala package of the output (default: derived from
                      INPUT, or "custom" when reading stdin)
  -o, --output FILE   Write output to FILE instead of stdout
  --batch             Convert every .d.ts under INPUT_DIR into OUTPUT_DIR
                      (defaults: $INPUT_FOLDER or ./samples,
                      $OUTPUT_FOLDER or ./output)
  -v, --verbose       Log skipped and degraded declarations
  --help              Show this help message
"""

DEFAULT_PACKAGE: str = "custom"
DEFAULT_INPUT_FOLDER: str = "./samples"
DEFAULT_OUTPUT_FOLDER: str = "./output"


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        return (raw.decode("utf-8"), 0)
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def default_package(input_file: str | None) -> str:
    if input_file is None:
        return DEFAULT_PACKAGE
    path = Path(input_file)
    name = package_name_for(path, path.parent)
    if name.endswith(".ts"):
        name = name[:-3]
    return name or DEFAULT_PACKAGE


def run_single(input_file: str | None, output_file: str | None, package: str | None) -> int:
    source, err = read_source(input_file)
    if err != 0:
        return err
    if package is None:
        package = default_package(input_file)
    try:
        output = convert(source, package)
    except ParseError as e:
        print("error:" + str(e.line) + ":" + str(e.col) + ": " + e.msg, file=sys.stderr)
        return 1
    except ConvertError as e:
        print("error: " + str(e), file=sys.stderr)
        return 1
    return write_output(output, output_file)


def run_batch(positional: list[str]) -> int:
    input_dir = positional[0] if len(positional) > 0 else os.environ.get("INPUT_FOLDER", DEFAULT_INPUT_FOLDER)
    output_dir = positional[1] if len(positional) > 1 else os.environ.get("OUTPUT_FOLDER", DEFAULT_OUTPUT_FOLDER)
    root = Path(input_dir).resolve()
    out = Path(output_dir).resolve()
    if not root.is_dir():
        print("error: not a directory '" + input_dir + "'", file=sys.stderr)
        return 1
    print("Scanning for .d.ts files in: " + str(root))
    print("Output folder: " + str(out))
    result = convert_directory(root, out)
    if result.total == 0:
        print("No .d.ts files found in the input folder.")
        return 0
    for path in result.converted:
        print("Converted: " + str(path.relative_to(out)))
    for path, message in result.failed:
        print("error: " + str(path.relative_to(root)) + ": " + message, file=sys.stderr)
    print(
        "Conversion complete: "
        + str(len(result.converted))
        + "/"
        + str(result.total)
        + " files converted successfully."
    )
    if len(result.failed) > 0:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    batch = False
    verbose = False
    package: str | None = None
    output_file: str | None = None
    positional: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--package":
            if i + 1 >= len(args):
                print("error: --package requires an argument", file=sys.stderr)
                return 2
            package = args[i + 1]
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                return 2
            output_file = args[i + 1]
            i += 2
        elif arg == "--batch":
            batch = True
            i += 1
        elif arg == "-v" or arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            positional.append(arg)
            i += 1
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if batch:
        if len(positional) > 2:
            print("error: unexpected argument '" + positional[2] + "'", file=sys.stderr)
            return 2
        if package is not None or output_file is not None:
            print("error: --package and --output do not apply to --batch", file=sys.stderr)
            return 2
        return run_batch(positional)
    if len(positional) > 1:
        print("error: unexpected argument '" + positional[1] + "'", file=sys.stderr)
        return 2
    input_file = positional[0] if len(positional) > 0 and positional[0] != "-" else None
    return run_single(input_file, output_file, package)


if __name__ == "__main__":
    sys.exit(main())
