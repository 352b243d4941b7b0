"""Extraction models - the contract between the package reader, the extractor, and the CLI.

Defines the per-slide result record handed back to callers and the settings
that steer an extraction pass (which indirect sources to follow, where the
part tree lives, and how failures are scoped).
"""

import codecs
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TargetKind(Enum):
    """Kind of part a slide relationship points at."""
    DIAGRAM = "diagrams"     # SmartArt data model (ppt/diagrams/dataN.xml)
    CHART = "charts"         # Chart part (ppt/charts/chartN.xml)


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------

@dataclass
class SlideRecord:
    """All text found on one slide, in output order.

    Direct slide paragraphs come first, followed by lines from each
    referenced diagram or chart part in the order the slide references them.
    """
    slide: int                           # 1-based slide number from the part name
    texts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"slide": self.slide, "texts": list(self.texts)}

    @classmethod
    def from_dict(cls, d: dict) -> "SlideRecord":
        return cls(slide=int(d["slide"]), texts=list(d.get("texts", [])))


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

_BOOL_FIELDS = (
    "isolate_slides",
    "index_named_diagrams",
    "include_diagrams",
    "include_charts",
)


@dataclass
class ExtractionSettings:
    """Knobs for one extraction pass.

    The defaults reproduce the reference behaviour: every slide shares one
    failure scope, both diagram and chart references are followed, and parts
    are looked up under ``ppt/``.
    """
    part_root: str = "ppt"
    isolate_slides: bool = False         # Drop a failing slide instead of aborting
    index_named_diagrams: bool = False   # Also scan diagrams/data{n}.xml by slide number
    include_diagrams: bool = True
    include_charts: bool = True
    encoding: str = "utf-8"

    def follows(self, kind: TargetKind) -> bool:
        """Whether references of the given kind should be scanned."""
        if kind is TargetKind.DIAGRAM:
            return self.include_diagrams
        return self.include_charts

    def to_dict(self) -> dict:
        return {
            "part_root": self.part_root,
            "isolate_slides": self.isolate_slides,
            "index_named_diagrams": self.index_named_diagrams,
            "include_diagrams": self.include_diagrams,
            "include_charts": self.include_charts,
            "encoding": self.encoding,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> "ExtractionSettings":
        d = d or {}
        defaults = cls()
        for name in _BOOL_FIELDS:
            if name in d and not isinstance(d[name], bool):
                raise ValueError(
                    f"Setting {name!r} must be true or false, got {d[name]!r}"
                )
        for name in ("part_root", "encoding"):
            if name in d and not isinstance(d[name], str):
                raise ValueError(
                    f"Setting {name!r} must be a string, got {d[name]!r}"
                )
        part_root = d.get("part_root", defaults.part_root).strip().strip("/")
        if not part_root:
            raise ValueError("Setting 'part_root' must name a directory, got an empty path")
        encoding = d.get("encoding", defaults.encoding)
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"Setting 'encoding' is not a known codec: {encoding!r}") from None
        return cls(
            part_root=part_root,
            isolate_slides=d.get("isolate_slides", defaults.isolate_slides),
            index_named_diagrams=d.get("index_named_diagrams",
                                       defaults.index_named_diagrams),
            include_diagrams=d.get("include_diagrams", defaults.include_diagrams),
            include_charts=d.get("include_charts", defaults.include_charts),
            encoding=encoding,
        )
