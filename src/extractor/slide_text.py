"""Slide text extraction — combines direct and referenced text per slide.

For each slide the extractor collects:

1. The slide's own paragraphs (``ppt/slides/slide{n}.xml``).
2. Text from each SmartArt data part and chart part the slide references,
   visited in the order the references appear in the slide markup.

Usage::

    from src.extractor import extract_file

    records = extract_file("deck.pptx")
    for record in records:
        print(record.slide, record.texts)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from src.container import PresentationPackage, open_package
from src.schema.models import ExtractionSettings, SlideRecord, TargetKind

from .part_names import (
    DEFAULT_PART_ROOT,
    diagram_data_path,
    part_path,
    slide_index,
    slide_part_path,
    target_kind,
)
from .relationships import collect_reference_ids, resolve
from .text_scanner import scan, scan_part

logger = logging.getLogger(__name__)


class SlideExtractionError(Exception):
    """Extraction of a single slide failed."""

    def __init__(self, slide_index: int, cause: Exception) -> None:
        self.slide_index = slide_index
        self.cause = cause
        super().__init__(f"slide {slide_index}: {cause}")


# ---------------------------------------------------------------------------
# Reference plan
# ---------------------------------------------------------------------------

@dataclass
class SlideReference:
    """One diagram or chart reference found on a slide."""
    ref_id: str
    target: str | None = None            # None when the manifest lacks the id
    kind: TargetKind | None = None       # None for unresolved or other targets


@dataclass
class SlidePlan:
    """What the extractor will read for one slide."""
    index: int
    slide_xml: str
    references: list[SlideReference] = field(default_factory=list)

    def followed(self, settings: ExtractionSettings) -> list[SlideReference]:
        """References that resolve to a diagram or chart being scanned."""
        return [
            ref for ref in self.references
            if ref.kind is not None and settings.follows(ref.kind)
        ]

    @property
    def has_diagram_reference(self) -> bool:
        return any(ref.kind is TargetKind.DIAGRAM for ref in self.references)


def plan_slide(package: PresentationPackage, index: int,
               settings: ExtractionSettings | None = None) -> SlidePlan:
    """Read a slide and resolve the diagram/chart references it uses."""
    settings = settings or ExtractionSettings()
    root = settings.part_root
    slide_xml = package.read_part(slide_part_path(index, root)) or ""
    rel_map = resolve(package, index, root)

    references = []
    for ref_id in collect_reference_ids(slide_xml):
        target = rel_map.get(ref_id)
        if target is None:
            logger.debug("Slide %d: reference %s has no manifest entry",
                         index, ref_id)
            references.append(SlideReference(ref_id))
            continue
        references.append(SlideReference(ref_id, target, target_kind(target)))
    return SlidePlan(index=index, slide_xml=slide_xml, references=references)


# ---------------------------------------------------------------------------
# Per-slide aggregation
# ---------------------------------------------------------------------------

def aggregate(package: PresentationPackage, index: int,
              settings: ExtractionSettings | None = None) -> SlideRecord:
    """Build the SlideRecord for slide ``index``."""
    settings = settings or ExtractionSettings()
    root = settings.part_root
    plan = plan_slide(package, index, settings)

    texts = scan(plan.slide_xml)
    for ref in plan.followed(settings):
        texts.extend(scan_part(package, part_path(ref.target, root)))

    if (settings.index_named_diagrams and settings.include_diagrams
            and not plan.has_diagram_reference):
        texts.extend(scan_part(package, diagram_data_path(index, root)))

    return SlideRecord(slide=index, texts=texts)


# ---------------------------------------------------------------------------
# Package driver
# ---------------------------------------------------------------------------

def slide_indices(package: PresentationPackage,
                  part_root: str = DEFAULT_PART_ROOT) -> list[int]:
    """Slide numbers present in the package, ascending numerically."""
    indices = {
        idx for idx in (slide_index(p, part_root)
                        for p in package.list_part_paths())
        if idx is not None
    }
    return sorted(indices)


def extract_all(package: PresentationPackage,
                settings: ExtractionSettings | None = None) -> list[SlideRecord]:
    """Extract every slide of an open package, ordered by slide number.

    A failure on any slide raises SlideExtractionError and no records are
    returned, unless ``settings.isolate_slides`` is set, in which case the
    failing slide is logged and left out.
    """
    settings = settings or ExtractionSettings()
    records = []
    for index in slide_indices(package, settings.part_root):
        try:
            records.append(aggregate(package, index, settings))
        except Exception as e:
            error = SlideExtractionError(index, e)
            if not settings.isolate_slides:
                raise error from e
            logger.warning("Skipping %s", error)
    return records


def extract_file(source: bytes | str | Path | BinaryIO,
                 settings: ExtractionSettings | None = None) -> list[SlideRecord]:
    """Open a package, extract all slides, and close it again."""
    settings = settings or ExtractionSettings()
    with open_package(source, encoding=settings.encoding) as package:
        return extract_all(package, settings)
