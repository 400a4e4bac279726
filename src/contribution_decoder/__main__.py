"""CLI entry-point for contribution_decoder.

Usage:
    python -m contribution_decoder decode <base64-payload>
    python -m contribution_decoder decode --file payload.txt [--format text|markdown|html|json]
    echo <base64-payload> | python -m contribution_decoder decode --file -
    python -m contribution_decoder decode <payload> --format json --diagnostics --output out.json
    python -m contribution_decoder validate <instance.json> <schema_name>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contribution_decoder import __version__
from contribution_decoder.api import run_decoder
from contribution_decoder.reports.exporters import FORMATS, export_contributions
from contribution_decoder.reports.sink import MemorySink
from contribution_decoder.utils.exit_codes import ExitCode


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="contribution-decoder",
        description="Decode base64 CBOR contribution payloads into binary/decimal tables.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log every skipped item (DEBUG level).",
    )
    sub = p.add_subparsers(dest="command")

    # ── decode subcommand ───────────────────────────────────────────
    dec_p = sub.add_parser(
        "decode",
        help="Decode a payload and print the contribution table.",
    )
    src = dec_p.add_mutually_exclusive_group()
    src.add_argument(
        "payload",
        nargs="?",
        default=None,
        help="Base64 payload text.",
    )
    src.add_argument(
        "--file",
        dest="payload_file",
        default=None,
        help="Read the payload from this file ('-' for stdin).",
    )
    dec_p.add_argument(
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    dec_p.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the rendering to this file instead of stdout.",
    )
    dec_p.add_argument(
        "--diagnostics",
        dest="with_diagnostics",
        action="store_true",
        default=False,
        help="Include skip diagnostics in JSON output.",
    )
    dec_p.add_argument(
        "--full-page",
        dest="full_page",
        action="store_true",
        default=False,
        help="With --format html, emit a complete HTML document.",
    )

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON instance against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument("schema_name", help="Schema filename, e.g. decode_result.schema.json")

    return p


def _read_payload(args: argparse.Namespace) -> str | None:
    if args.payload_file is None:
        return args.payload
    if args.payload_file == "-":
        return sys.stdin.read()
    return Path(args.payload_file).read_text(encoding="utf-8")


def _handle_decode(args: argparse.Namespace) -> int:
    """Dispatch ``contribution-decoder decode``."""
    try:
        payload = _read_payload(args)
    except OSError as e:
        print(f"error: cannot read payload: {e}", file=sys.stderr)
        return ExitCode.ERROR
    if payload is None:
        print("error: no payload given (pass it as an argument or use --file)", file=sys.stderr)
        return ExitCode.ERROR

    export_kwargs = {}
    if args.fmt == "html" and args.full_page:
        export_kwargs["full_page"] = True
    sink = MemorySink(args.fmt, **export_kwargs)

    result = run_decoder(payload, sink)

    output = sink.text
    if args.fmt == "json" and args.with_diagnostics and result.ok:
        output = export_contributions(
            result.contributions, "json", diagnostics=result.diagnostics
        )

    if args.output:
        out: Path = args.output
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(output, encoding="utf-8")
        print(f"Output written to {out}", file=sys.stderr)
    else:
        sys.stdout.write(output)

    if result.error is not None:
        print(f"error: {result.error}", file=sys.stderr)
        return ExitCode.ERROR
    if not result.contributions:
        return ExitCode.EMPTY
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    """Dispatch ``contribution-decoder validate``.

    Exit code contract:
      1 = schema violation
      2 = unreadable instance, wrong schema_version, unknown schema
    """
    import jsonschema

    from contribution_decoder.contracts.load import validate_file

    try:
        validate_file(Path(args.instance), args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (see ``utils.exit_codes``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "decode":
        return _handle_decode(args)
    if args.command == "validate":
        return _handle_validate(args)

    parser.print_help(sys.stderr)
    return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
