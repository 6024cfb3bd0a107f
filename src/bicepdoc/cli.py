#!/usr/bin/env python3
"""
📚 bicepdoc CLI - Reference docs for Bicep local-deploy resource types.

Usage:
    bicepdoc generate      Generate Markdown docs for resource models
    bicepdoc check         Check documentation coverage
    bicepdoc --help        Show help
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from yaml import YAMLError

from bicepdoc import __version__

console = Console()


def _load_config(args: argparse.Namespace):
    """Load config and apply command line overrides."""
    from bicepdoc.config import load_config

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValidationError, YAMLError) as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        sys.exit(1)

    if args.source:
        config.source_dirs = [Path(s) for s in args.source]
    if args.pattern:
        config.patterns = list(args.pattern)
    if args.ignore:
        config.ignore_file = Path(args.ignore)
    if args.workers:
        config.max_workers = args.workers

    return config


def _discover(config, verbose: bool, report_errors: bool = True):
    """Discover descriptors, exiting on unrecoverable input errors."""
    from bicepdoc.discovery import ModelDiscovery
    from bicepdoc.ignore import IgnoreFile

    if not config.source_dirs:
        console.print("[red]Error:[/red] No source directories configured")
        sys.exit(1)

    missing = [d for d in config.source_dirs if not d.is_dir()]
    if missing:
        for source_dir in missing:
            console.print(f"[red]Error:[/red] Source directory not found: {source_dir}")
        sys.exit(1)

    try:
        ignore = IgnoreFile.load(config.source_dirs[0], config.ignore_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    discovery = ModelDiscovery(
        patterns=config.patterns,
        ignore=ignore,
        console=console,
        verbose=verbose,
    )
    result = discovery.discover(config.source_dirs)

    if report_errors:
        for error in result.errors:
            console.print(f"[yellow]⚠️  {error}[/yellow]")

    return result


def generate_docs(args: argparse.Namespace) -> None:
    """Generate documentation for all discovered resource types."""
    from bicepdoc.generator import DocumentationGenerator

    verbose = args.verbose or _env_verbose()
    config = _load_config(args)
    if args.output:
        config.output_dir = Path(args.output)
    if args.force:
        config.force = True

    discovered = _discover(config, verbose)

    if verbose:
        console.print(
            f"📚 Generating docs for [cyan]{len(discovered.descriptors)}[/cyan] "
            f"resource type(s) to [cyan]{config.output_dir}[/cyan]..."
        )

    generator = DocumentationGenerator(
        max_workers=config.max_workers, console=console, verbose=verbose
    )
    results = generator.generate_all(discovered.descriptors)
    generator.write_all(results, config.output_dir, force=config.force)

    total_created = sum(len(r.files_created) for r in results)
    total_updated = sum(len(r.files_updated) for r in results)
    total_skipped = sum(len(r.files_skipped) for r in results)
    errors = [r for r in results if r.errors]

    for result in results:
        if result.errors:
            console.print(f"[red]❌ {result.resource_name}[/red]")
            for error in result.errors:
                console.print(f"   {error}")
        elif verbose:
            console.print(f"[green]✅ {result.resource_name}[/green] → {result.filename}")

    console.print(
        f"[bold]📊 Summary:[/bold] {len(results)} resources | {total_created} created"
        f" | {total_updated} updated | {total_skipped} skipped"
    )

    if errors or not discovered.success:
        failed = len(errors) + len(discovered.errors)
        console.print(f"[bold red]{failed} item(s) had errors[/bold red]")
        sys.exit(1)


def check_docs(args: argparse.Namespace) -> None:
    """Check documentation coverage for all discovered resource types."""
    from bicepdoc.checker import CoverageChecker, summarize
    from bicepdoc.generator import DocumentationGenerator

    verbose = args.verbose or _env_verbose()
    config = _load_config(args)
    if args.strict:
        config.check.strict = True
    if args.require:
        config.check.required = sorted(set(config.check.required) | set(args.require))
    if args.include_custom and "custom" not in config.check.required:
        config.check.required.append("custom")
    if args.output:
        config.check.output = args.output

    as_json = config.check.output == "json"
    discovered = _discover(config, verbose and not as_json, report_errors=not as_json)

    checker = CoverageChecker(
        required=config.check.required,
        strict=config.check.strict,
        console=console,
    )
    generator = DocumentationGenerator(max_workers=config.max_workers, console=console)
    reports = generator.check_all(discovered.descriptors, checker)
    result = summarize(reports)

    if as_json:
        report = {
            "summary": result.to_dict(),
            "resources": [r.to_dict() for r in reports],
            "discovery_errors": discovered.errors,
        }
        json.dump(report, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        checker.print_results(reports, verbose=verbose)

    if not result.passed:
        sys.exit(1)


def _env_verbose() -> bool:
    from bicepdoc.config import get_settings

    return get_settings().verbose


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--source",
        "-s",
        action="append",
        help="Source directory to scan (can specify multiple, default: .)",
    )
    parser.add_argument(
        "--pattern",
        "-p",
        action="append",
        help="File glob to scan (can specify multiple, default: *.py, *.resource.yaml)",
    )
    parser.add_argument("--ignore", help="Ignore file (default: <source>/.bicepdocignore)")
    parser.add_argument("--config", "-c", help="Config file (default: ./bicepdoc.yaml)")
    parser.add_argument("--workers", type=int, help="Maximum concurrent resources")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bicepdoc",
        description="📚 bicepdoc - Reference docs for Bicep local-deploy resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bicepdoc generate -s src/Models -o docs     Generate docs into ./docs
  bicepdoc generate --force                   Overwrite existing files
  bicepdoc check -s src/Models                Check documentation coverage
  bicepdoc check --strict                     Treat warnings as errors
  bicepdoc check --require heading --output json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen_parser = subparsers.add_parser("generate", help="Generate Markdown documentation")
    _add_common_arguments(gen_parser)
    gen_parser.add_argument("--output", "-o", help="Output directory (default: docs)")
    gen_parser.add_argument(
        "--force", "-f", action="store_true", help="Overwrite existing files"
    )

    check_parser = subparsers.add_parser("check", help="Check documentation coverage")
    _add_common_arguments(check_parser)
    check_parser.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors"
    )
    check_parser.add_argument(
        "--require",
        action="append",
        choices=["heading", "example", "front_matter", "custom"],
        help="Require an annotation kind on every resource (can specify multiple)",
    )
    check_parser.add_argument(
        "--include-custom",
        action="store_true",
        help="Require at least one custom section (same as --require custom)",
    )
    check_parser.add_argument(
        "--output",
        "-o",
        choices=["console", "json"],
        help="Output format (default: console)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "generate":
        generate_docs(args)
    elif args.command == "check":
        check_docs(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
