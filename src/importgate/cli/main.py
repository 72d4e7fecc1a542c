"""importgate CLI entry point — argument parsing and command dispatch.

Builds the argparse tree and dispatches each subcommand to its handler.
Program name, description, exit codes and output labels come from the
central config module.

Usage::

    importgate check [--config PATH] [--fix] [--format stderr|json] FILE...
    importgate check --stdin [--filename NAME] [--fix]
    importgate explain [--config PATH] FILE
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from importgate import __version__
from importgate.engine import CheckResult, check_source, collect, fix_source
from importgate.exceptions import ConfigurationError, ImportgateParseError
from importgate.lib import config
from importgate.lib.classifier import classify_all
from importgate.lib.formatter import (
    format_classification,
    format_summary_stderr,
    format_violation_stderr,
    format_violations_json,
)
from importgate.lib.project import ProjectConfig, find_project_config, load_project_config


def _load_config(path: Optional[str]) -> ProjectConfig:
    """Load the explicit config, or discover one from the working directory."""
    if path:
        return load_project_config(path)
    found = find_project_config()
    if found is None:
        filename = config.get_str("filenames.project_config")
        msg = config.get_str("messages.config_not_found").format(path=filename)
        raise ConfigurationError([msg])
    return load_project_config(found)


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _write(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def _run_one(
    source: str, filepath: str, project: ProjectConfig, fix: bool
) -> CheckResult:
    log_dir = project.logging.log_dir
    if fix:
        return fix_source(source, filepath, project.policy, log_dir=log_dir)
    return check_source(source, filepath, project.policy, log_dir=log_dir)


def cmd_check(args: argparse.Namespace) -> int:
    """Check (and optionally fix) files or stdin; return the exit code."""
    exit_ok = config.get_int("exit_codes.ok")
    exit_violations = config.get_int("exit_codes.violations")
    exit_error = config.get_int("exit_codes.error")
    fmt_json = config.get_str("formats.json")

    project = _load_config(args.config)
    results: list[CheckResult] = []
    failed = False

    if args.stdin:
        filepath = args.filename or config.get_str("defaults.stdin_filename")
        source = sys.stdin.read()
        result = _run_one(source, filepath, project, args.fix)
        results.append(result)
        if args.fix and result.fixed_source is not None:
            sys.stdout.write(result.fixed_source)
    else:
        if not args.files:
            sys.stderr.write("importgate: no files given (use FILE... or --stdin)\n")
            return exit_error
        for filepath in args.files:
            try:
                source = _read(filepath)
            except OSError as exc:
                msg = config.get_str("messages.file_not_found")
                sys.stderr.write(msg.format(path=filepath, error=exc) + "\n")
                failed = True
                continue
            try:
                result = _run_one(source, filepath, project, args.fix)
            except ImportgateParseError as exc:
                sys.stderr.write(f"  {exc}\n")
                failed = True
                continue
            results.append(result)
            if args.fix and result.fixed_source not in (None, source):
                _write(filepath, result.fixed_source)
                msg = config.get_str("messages.fixed_file")
                sys.stderr.write(
                    msg.format(path=filepath, count=result.fixes_applied) + "\n"
                )

    if args.format == fmt_json:
        indent = config.get_int("defaults.json_indent")
        sys.stderr.write(json.dumps(format_violations_json(results), indent=indent) + "\n")
    else:
        parts = [
            format_violation_stderr(v, r.filepath)
            for r in results
            for v in r.violations
        ]
        parts.append(format_summary_stderr(results))
        sys.stderr.write("\n\n".join(parts) + "\n")

    if failed:
        return exit_error
    if any(r.violations for r in results):
        return exit_violations
    return exit_ok


def cmd_explain(args: argparse.Namespace) -> int:
    """Print how the policy classifies each import of a file."""
    project = _load_config(args.config)
    source = _read(args.file)
    statements = collect(source, args.file).statements
    classifications = classify_all(statements, project.policy)
    sys.stdout.write(
        format_classification(statements, classifications, project.policy) + "\n"
    )
    return config.get_int("exit_codes.ok")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse tree (one sub-parser per subcommand)."""
    prog = config.get_str("cli.prog_name")
    fmt_stderr = config.get_str("formats.stderr")
    fmt_json = config.get_str("formats.json")

    parser = argparse.ArgumentParser(
        prog=prog, description=config.get_str("cli.description")
    )
    parser.add_argument(
        "--version", action="version", version=f"{prog} {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sub_check = subparsers.add_parser("check", help="Check import order")
    sub_check.add_argument("files", nargs="*", help="Python files to check")
    sub_check.add_argument("--config", help="Path to .importgate.yaml")
    sub_check.add_argument(
        "--fix", action="store_true", help="Rewrite files with fixes applied"
    )
    sub_check.add_argument(
        "--format",
        choices=[fmt_stderr, fmt_json],
        default=config.get_str("formats.default"),
        help="Output format",
    )
    sub_check.add_argument(
        "--stdin", action="store_true", help="Read code from stdin"
    )
    sub_check.add_argument(
        "--filename", help="Filename to use when reading from stdin"
    )

    sub_explain = subparsers.add_parser(
        "explain", help="Show the group each import falls into"
    )
    sub_explain.add_argument("file", help="Python file to classify")
    sub_explain.add_argument("--config", help="Path to .importgate.yaml")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Parse arguments, dispatch to a handler and exit with its code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    dispatch = {
        "check": cmd_check,
        "explain": cmd_explain,
    }
    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(config.get_int("exit_codes.ok"))

    try:
        code = handler(args)
    except ConfigurationError as exc:
        sys.stderr.write(f"{exc}\n")
        code = config.get_int("exit_codes.error")
    except ImportgateParseError as exc:
        sys.stderr.write(f"  {exc}\n")
        code = config.get_int("exit_codes.error")
    except OSError as exc:
        msg = config.get_str("messages.file_not_found")
        sys.stderr.write(msg.format(path=getattr(exc, "filename", ""), error=exc) + "\n")
        code = config.get_int("exit_codes.error")
    sys.exit(code)


if __name__ == "__main__":
    main()
