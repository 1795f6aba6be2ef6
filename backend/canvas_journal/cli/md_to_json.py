"""
md-to-json: escape a Markdown file for pasting into a JSON string value.

Usage:
    md-to-json <file.md> [--copy]

The output is the file's JSON string literal without the surrounding quotes
and without one trailing escaped newline. Non-ASCII characters are kept as
they are. --copy also pipes the result to pbcopy (macOS); a clipboard
failure only prints a warning.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from canvas_journal.cli import CommandResult

SEPARATOR = "=" * 60

USAGE = """
Markdown to JSON String Converter

Usage:
  md-to-json <file.md> [--copy]

Options:
  --copy    Copy result to clipboard (macOS)

Examples:
  md-to-json content/example.md
  md-to-json content/example.md --copy
"""


def escape_markdown(content: str) -> str:
    escaped = json.dumps(content, ensure_ascii=False)[1:-1]
    if escaped.endswith("\\n"):
        escaped = escaped[:-2]
    return escaped


def copy_to_clipboard(text: str) -> bool:
    try:
        subprocess.run(["pbcopy"], input=text.encode("utf-8"), check=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


def convert(path: str, copy: bool = False, out: Optional[TextIO] = None) -> CommandResult:
    out = out or sys.stdout
    try:
        content = Path(path).resolve().read_text(encoding="utf-8")
    except OSError as e:
        return CommandResult.failure(f"Error: {e}")

    escaped = escape_markdown(content)

    print("\n" + SEPARATOR, file=out)
    print("COPY EVERYTHING BETWEEN THE LINES BELOW:", file=out)
    print(SEPARATOR + "\n", file=out)
    print(escaped, file=out)
    print("\n" + SEPARATOR + "\n", file=out)

    if copy:
        if copy_to_clipboard(escaped):
            print("Copied to clipboard!\n", file=out)
            print('Now paste it as the "description" value in your JSON.\n', file=out)
        else:
            print("Warning: could not copy to clipboard\n", file=out)
    else:
        print("Tip: use --copy to copy directly to the clipboard\n", file=out)

    return CommandResult.success()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md-to-json",
        description="Convert a Markdown file to a JSON-escaped string.",
    )
    parser.add_argument("file", nargs="?", help="Markdown file to convert")
    parser.add_argument("--copy", action="store_true", help="Copy result to clipboard (macOS)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.file:
        print(USAGE)
        return 0

    result = convert(args.file, copy=args.copy)
    if not result.ok:
        print(result.message, file=sys.stderr)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
