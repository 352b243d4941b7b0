"""Slide text extraction engine.

Scans slide parts for paragraph text and follows each slide's
relationship manifest into the SmartArt and chart parts it embeds.

- text_scanner.py: paragraph / text-run scanning of raw part markup
- relationships.py: manifest resolution and reference-id collection
- slide_text.py: per-slide aggregation and the package driver
- part_names.py: slide-number <-> part-path conventions
"""

from .relationships import collect_reference_ids, parse_manifest, resolve
from .slide_text import (
    SlideExtractionError,
    SlidePlan,
    SlideReference,
    aggregate,
    extract_all,
    extract_file,
    plan_slide,
    slide_indices,
)
from .text_scanner import scan, scan_part

__all__ = [
    "SlideExtractionError",
    "SlidePlan",
    "SlideReference",
    "aggregate",
    "collect_reference_ids",
    "extract_all",
    "extract_file",
    "parse_manifest",
    "plan_slide",
    "resolve",
    "scan",
    "scan_part",
    "slide_indices",
]
