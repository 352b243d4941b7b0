"""Part naming conventions for presentation packages.

Slides, their relationship manifests, and the index-named diagram data
parts all follow fixed naming patterns keyed by the slide number:

    ppt/slides/slide{n}.xml
    ppt/slides/_rels/slide{n}.xml.rels
    ppt/diagrams/data{n}.xml

Relationship targets are written relative to the slide's directory
(``../charts/chart2.xml``) or as absolute package paths
(``/ppt/charts/chart2.xml``); both are normalized here to a path relative
to the part root (``charts/chart2.xml``).
"""

import re

from src.schema.models import TargetKind

DEFAULT_PART_ROOT = "ppt"

_SLIDE_NAME_RE = re.compile(r"^slides/slide(\d+)\.xml$")


def slide_part_path(index: int, part_root: str = DEFAULT_PART_ROOT) -> str:
    return f"{part_root}/slides/slide{index}.xml"


def slide_rels_path(index: int, part_root: str = DEFAULT_PART_ROOT) -> str:
    """Path of the relationship manifest belonging to slide ``index``."""
    return f"{part_root}/slides/_rels/slide{index}.xml.rels"


def diagram_data_path(index: int, part_root: str = DEFAULT_PART_ROOT) -> str:
    """Path of the diagram data part conventionally numbered like the slide."""
    return f"{part_root}/diagrams/data{index}.xml"


def part_path(target: str, part_root: str = DEFAULT_PART_ROOT) -> str:
    """Join a normalized relationship target onto the part root."""
    return f"{part_root}/{target}"


def slide_index(path: str, part_root: str = DEFAULT_PART_ROOT) -> int | None:
    """Return the slide number encoded in a slide part path, else None.

    Examples:
        "ppt/slides/slide10.xml"           -> 10
        "ppt/slides/_rels/slide1.xml.rels" -> None
        "ppt/slideLayouts/slideLayout1.xml" -> None
    """
    prefix = f"{part_root}/"
    if not path.startswith(prefix):
        return None
    m = _SLIDE_NAME_RE.match(path[len(prefix):])
    if not m:
        return None
    index = int(m.group(1))
    return index if index > 0 else None


def normalize_target(target: str, part_root: str = DEFAULT_PART_ROOT) -> str:
    """Strip parent-directory and root prefixes from a relationship target.

    Examples:
        "../charts/chart2.xml"      -> "charts/chart2.xml"
        "/ppt/diagrams/data1.xml"   -> "diagrams/data1.xml"
        "charts/chart2.xml"         -> "charts/chart2.xml"
    """
    target = target.strip().replace("\\", "/")
    if target.startswith("/"):
        target = target.lstrip("/")
        if target.startswith(f"{part_root}/"):
            target = target[len(part_root) + 1:]
        return target
    segments = target.split("/")
    while segments and segments[0] in ("..", "."):
        segments.pop(0)
    return "/".join(segments)


def target_kind(target: str) -> TargetKind | None:
    """Classify a normalized target by its directory segment."""
    segments = target.split("/")[:-1]
    for kind in TargetKind:
        if kind.value in segments:
            return kind
    return None
