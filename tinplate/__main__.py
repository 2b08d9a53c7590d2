"""CLI entry point for Tinplate."""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import ExitCode, TinplateError, __version__, compile

PARTIAL_SUFFIX = ".tpl"


class InputError(TinplateError):
    """Template, partial or data file could not be read."""

    exit_code = ExitCode.INPUT_ERROR


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tinplate",
        description="Tinplate - A small template language compiler",
    )
    parser.add_argument("--version", action="version", version=f"tinplate {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Version command
    subparsers.add_parser("version", help="Show version")

    # render
    render_parser = subparsers.add_parser("render", help="Render a template file")
    render_parser.add_argument("template", help="Path to template file")
    render_parser.add_argument("--data", "-d", help="JSON data")
    render_parser.add_argument("--data-file", "-f", help="Path to JSON data file")
    render_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")
    _add_partial_args(render_parser)
    render_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log compilation and rendering details"
    )

    # check
    check_parser = subparsers.add_parser("check", help="Compile a template without rendering")
    check_parser.add_argument("template", help="Path to template file")
    _add_partial_args(check_parser)
    check_parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log compilation details"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "version":
            return cmd_version()
        elif args.command == "render":
            return cmd_render(args)
        elif args.command == "check":
            return cmd_check(args)
    except TinplateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        return ExitCode.RENDER_ERROR

    return 0


def _add_partial_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--partial",
        "-p",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Register a partial (repeatable)",
    )
    parser.add_argument(
        "--partials-dir",
        help=f"Register every *{PARTIAL_SUFFIX} file in a directory, keyed by file stem",
    )


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e.strerror}") from e


def load_partials(args) -> dict[str, str]:
    """Collect partial sources from --partials-dir and --partial options.

    Explicit --partial options override directory entries of the same name.
    """
    partials = {}
    if args.partials_dir:
        directory = Path(args.partials_dir)
        if not directory.is_dir():
            raise InputError(f"Not a directory: {directory}")
        for path in sorted(directory.glob(f"*{PARTIAL_SUFFIX}")):
            partials[path.stem] = _read_text(path)

    for option in args.partial:
        name, sep, path = option.partition("=")
        if not sep or not name:
            raise InputError(f"Invalid --partial {option!r}, expected NAME=PATH")
        partials[name] = _read_text(path)
    return partials


def load_data(args) -> dict:
    try:
        if args.data:
            data = json.loads(args.data)
        elif args.data_file:
            data = json.loads(_read_text(args.data_file))
        else:
            return {}
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON data: {e}") from e

    if not isinstance(data, dict):
        raise InputError("JSON data must be an object")
    return data


def cmd_version() -> int:
    """Show version."""
    print(f"tinplate {__version__}")
    return 0


def cmd_render(args) -> int:
    """Compile and render a template."""
    template = compile(_read_text(args.template), load_partials(args))
    output = template.render(load_data(args))

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
    return 0


def cmd_check(args) -> int:
    """Compile a template and report its size."""
    template = compile(_read_text(args.template), load_partials(args))
    print(f"Valid: {args.template}")
    print(f"  Partials: {len(template.partials)}")
    print(f"  Nodes: {template.node_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
