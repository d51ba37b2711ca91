"""callreplay CLI.

Entry point for the ``callreplay`` command-line tool.

Usage:
    callreplay list FOLDER [--name NAME]
    callreplay check FOLDER [--format json|text]
    callreplay show FOLDER NAME INDEX
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict, List

from .core.canon import parse_record, render_record
from .storage.store import FileRecordStore
from .version import CALLREPLAY_VERSION, RECORD_FORMAT

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _open_store(folder: str) -> FileRecordStore:
    if not os.path.isdir(folder):
        print(f"Error: records folder '{folder}' does not exist", file=sys.stderr)
        sys.exit(1)
    return FileRecordStore(folder=folder)


def _format_indices(indices: List[int]) -> str:
    if len(indices) > 8:
        head = ", ".join(str(i) for i in indices[:8])
        return f"{head}, ... ({len(indices)} total)"
    return ", ".join(str(i) for i in indices)


def _check_fixture(store: FileRecordStore, name: str) -> Dict[str, Any]:
    indices = store.list_indices(name)
    invalid = []
    for index in indices:
        parsed = parse_record(store.read_text(name, index) or "")
        if not parsed.ok:
            invalid.append({"index": index, "location": store.describe(name, index), "reason": parsed.error})
    expected = list(range(1, len(indices) + 1))
    gaps = sorted(set(range(1, (indices[-1] if indices else 0) + 1)) - set(indices))
    return {
        "name": name,
        "records": len(indices),
        "invalid": invalid,
        "gaps": gaps,
        "ok": not invalid and indices == expected,
    }


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_list(args: argparse.Namespace) -> None:
    store = _open_store(args.folder)
    names = [args.name] if args.name else store.list_names()

    if not names or not any(store.list_indices(n) for n in names):
        print(f"No call records found in {args.folder}")
        return

    for name in names:
        indices = store.list_indices(name)
        if indices:
            print(f"{name}: {len(indices)} record(s) [{_format_indices(indices)}]")


def _cmd_check(args: argparse.Namespace) -> None:
    store = _open_store(args.folder)
    results = [_check_fixture(store, name) for name in store.list_names()]
    ok = all(r["ok"] for r in results)

    if args.format == "json":
        print(
            json.dumps(
                {"format": RECORD_FORMAT, "ok": ok, "fixtures": results},
                indent=2,
            )
        )
    else:
        for r in results:
            status = "ok" if r["ok"] else "FAIL"
            print(f"{status:4} {r['name']} ({r['records']} record(s))")
            for item in r["invalid"]:
                print(f"       invalid {item['location']}: {item['reason']}")
            if r["gaps"]:
                print(f"       missing indices: {_format_indices(r['gaps'])}")

    if not ok:
        sys.exit(1)


def _cmd_show(args: argparse.Namespace) -> None:
    store = _open_store(args.folder)
    if args.index < 1:
        print(f"Error: call index must be >= 1, got {args.index}", file=sys.stderr)
        sys.exit(1)
    text = store.read_text(args.name, args.index)
    if text is None:
        print(
            f"Error: no record for '{args.name}' call #{args.index} in {args.folder}",
            file=sys.stderr,
        )
        sys.exit(1)

    parsed = parse_record(text)
    if not parsed.ok:
        print(f"Error: {store.describe(args.name, args.index)}: {parsed.error}", file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(render_record(parsed.record))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="callreplay",
        description="callreplay: inspect record-and-replay call records",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {CALLREPLAY_VERSION}")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List fixtures and their records")
    list_parser.add_argument("folder", help="Records folder")
    list_parser.add_argument("--name", help="Only list this fixture")
    list_parser.set_defaults(func=_cmd_list)

    check_parser = subparsers.add_parser(
        "check", help="Validate every record file and report gaps"
    )
    check_parser.add_argument("folder", help="Records folder")
    check_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    check_parser.set_defaults(func=_cmd_check)

    show_parser = subparsers.add_parser("show", help="Print one call record")
    show_parser.add_argument("folder", help="Records folder")
    show_parser.add_argument("name", help="Fixture name")
    show_parser.add_argument("index", type=int, help="1-based call index")
    show_parser.set_defaults(func=_cmd_show)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
