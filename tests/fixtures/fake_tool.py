#!/usr/bin/env python3
"""Fake CLI tool for process runner tests.

Usage:
    python fake_tool.py [--stdout-bytes N] [--stdout TEXT] [--stderr TEXT]
                        [--echo-stdin] [--exit-code CODE]

Arguments:
    --stdout-bytes: Write N bytes cycling through 0..255 to stdout
    --stdout: Write TEXT to stdout (no newline added)
    --stderr: Write TEXT to stderr (no newline added)
    --echo-stdin: Copy stdin to stdout before anything else
    --exit-code: Exit with CODE (default: 0)
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn


def pattern(count: int) -> bytes:
    return bytes(i % 256 for i in range(count))


def main() -> NoReturn:
    parser = argparse.ArgumentParser(description="Fake CLI tool")
    parser.add_argument("--stdout-bytes", type=int, default=0)
    parser.add_argument("--stdout", default="")
    parser.add_argument("--stderr", default="")
    parser.add_argument("--echo-stdin", action="store_true")
    parser.add_argument("--exit-code", type=int, default=0)
    args = parser.parse_args()

    out = sys.stdout.buffer
    if args.echo_stdin:
        out.write(sys.stdin.buffer.read())
    if args.stdout_bytes:
        out.write(pattern(args.stdout_bytes))
    if args.stdout:
        out.write(args.stdout.encode("utf-8"))
    out.flush()

    if args.stderr:
        sys.stderr.buffer.write(args.stderr.encode("utf-8"))
        sys.stderr.buffer.flush()

    sys.exit(args.exit_code)


if __name__ == "__main__":
    main()
