"""CLI entry point for Slide Text Extractor.

Runs the extraction engine over a .pptx file and writes the per-slide
text collection, or shows how each slide's references resolve.

Usage::

    # Extract all slide text as JSON to stdout
    python -m src.cli extract deck.pptx

    # Write YAML to a file, skipping chart text
    python -m src.cli extract deck.pptx \\
        --format yaml --no-charts \\
        --output output/deck_text.yaml

    # Keep going when a single slide cannot be read
    python -m src.cli extract deck.pptx --isolate-slides

    # Show each slide's diagram/chart references and their targets
    python -m src.cli inspect deck.pptx

    # Write a settings file with the defaults, then use it
    python -m src.cli init-config config/extract.yaml
    python -m src.cli extract deck.pptx --config config/extract.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from src.container import PackageError, open_package
from src.extractor import (
    SlideExtractionError,
    extract_all,
    plan_slide,
    slide_indices,
)
from src.schema.loader import dump_records, load_settings, save_settings
from src.schema.models import ExtractionSettings


# ---------------------------------------------------------------------------
# Settings loading
# ---------------------------------------------------------------------------

def _load_settings(args):
    """Build ExtractionSettings from --config plus command-line overrides."""
    config = getattr(args, "config", None)
    if config:
        path = Path(config)
        if not path.exists():
            _error(f"Config file not found: {path}")
        try:
            settings = load_settings(path)
        except (ValueError, yaml.YAMLError) as e:
            _error(f"Invalid config {path}: {e}")
    else:
        settings = ExtractionSettings()

    if getattr(args, "isolate_slides", False):
        settings.isolate_slides = True
    if getattr(args, "no_diagrams", False):
        settings.include_diagrams = False
    if getattr(args, "no_charts", False):
        settings.include_charts = False
    return settings


def _pptx_path(args):
    path = Path(args.pptx)
    if not path.exists():
        _error(f"PPTX file not found: {path}")
    return path


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_extract(args):
    """Extract slide text from a PPTX file."""
    settings = _load_settings(args)
    pptx_path = _pptx_path(args)

    _info(f"Extracting {pptx_path}")
    try:
        with open_package(pptx_path, encoding=settings.encoding) as package:
            records = extract_all(package, settings)
    except (PackageError, SlideExtractionError) as e:
        _error(str(e))

    line_count = sum(len(r.texts) for r in records)
    _info(f"Extracted {line_count} line(s) from {len(records)} slide(s)")

    rendered = dump_records(records, args.format)
    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
        _info(f"Written: {output}")
    else:
        print(rendered)


def cmd_inspect(args):
    """Show slide parts and how their references resolve."""
    settings = _load_settings(args)
    pptx_path = _pptx_path(args)

    try:
        with open_package(pptx_path, encoding=settings.encoding) as package:
            indices = slide_indices(package, settings.part_root)
            print(f"Package: {pptx_path}")
            print(f"Slides:  {len(indices)}")
            failed = 0
            for index in indices:
                try:
                    plan = plan_slide(package, index, settings)
                except Exception as e:
                    failed += 1
                    print(f"  [{index:2d}] unreadable")
                    _warn(f"slide {index}: {e}")
                    continue
                print(f"  [{index:2d}] {len(plan.references)} reference(s)")
                for ref in plan.references:
                    if ref.target is None:
                        print(f"       {ref.ref_id} -> (no manifest entry)")
                    else:
                        kind = ref.kind.value if ref.kind else "ignored"
                        print(f"       {ref.ref_id} -> {ref.target} ({kind})")
    except PackageError as e:
        _error(str(e))

    if failed:
        _error(f"{failed} slide(s) could not be read")


def cmd_init_config(args):
    """Write a settings file holding the defaults."""
    path = Path(args.path)
    if path.exists() and not args.force:
        _error(f"{path} already exists. Use --force to overwrite.")
    save_settings(ExtractionSettings(), path)
    _info(f"Written: {path}")


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def _info(msg):
    print(f"  {msg}", file=sys.stderr)


def _warn(msg):
    print(f"  WARNING: {msg}", file=sys.stderr)


def _error(msg):
    print(f"  ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


class _WarningHandler(logging.Handler):
    """Route library warnings through the CLI's stderr format."""

    def emit(self, record):
        _warn(record.getMessage())


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="slide-text",
        description="Extract slide, SmartArt and chart text from PPTX files.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---- extract ----
    ext = subparsers.add_parser(
        "extract",
        help="Extract per-slide text from a PPTX file.",
    )
    ext.add_argument("pptx", help="Path to the PPTX file.")
    _add_config_args(ext)
    ext.add_argument(
        "-o", "--output",
        help="Output file path (default: stdout).",
    )
    ext.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format (default: json).",
    )
    ext.add_argument(
        "--isolate-slides",
        dest="isolate_slides",
        action="store_true",
        default=False,
        help="Skip slides that fail instead of aborting the extraction.",
    )
    ext.add_argument(
        "--no-diagrams",
        dest="no_diagrams",
        action="store_true",
        default=False,
        help="Do not follow SmartArt diagram references.",
    )
    ext.add_argument(
        "--no-charts",
        dest="no_charts",
        action="store_true",
        default=False,
        help="Do not follow chart references.",
    )
    _add_verbose_arg(ext)
    ext.set_defaults(func=cmd_extract)

    # ---- inspect ----
    insp = subparsers.add_parser(
        "inspect",
        help="Show slides and their diagram/chart references.",
    )
    insp.add_argument("pptx", help="Path to the PPTX file.")
    _add_config_args(insp)
    _add_verbose_arg(insp)
    insp.set_defaults(func=cmd_inspect)

    # ---- init-config ----
    init = subparsers.add_parser(
        "init-config",
        help="Write a settings YAML file with default values.",
    )
    init.add_argument("path", help="Where to write the settings file.")
    init.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite an existing file.",
    )
    init.set_defaults(func=cmd_init_config)

    return parser


def _add_config_args(parser):
    """Add --config to a subparser."""
    parser.add_argument(
        "--config",
        help="Path to a settings YAML file.",
    )


def _add_verbose_arg(parser):
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show debug logging from the extractor.",
    )


def _configure_logging(verbose):
    """Debug logging to stderr under -v; otherwise only warnings, CLI-styled."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="  %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        return
    logger = logging.getLogger("src")
    if not any(isinstance(h, _WarningHandler) for h in logger.handlers):
        handler = _WarningHandler(level=logging.WARNING)
        logger.addHandler(handler)
    logger.setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))
    args.func(args)


if __name__ == "__main__":
    main()
