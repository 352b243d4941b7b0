"""Relationship resolution for slide parts.

A slide does not name its embedded SmartArt diagrams or charts directly;
its markup carries short reference ids (``r:dm="rId4"``, ``r:id="rId3"``)
that the slide's relationship manifest maps to part paths:

    <Relationship Id="rId3" Type=".../chart" Target="../charts/chart2.xml"/>

``resolve`` reads the manifest into an id -> target map and
``collect_reference_ids`` finds which ids the slide markup actually uses
for diagrams and charts.
"""

import logging
import re

from lxml import etree

from src.container import PresentationPackage

from .part_names import DEFAULT_PART_ROOT, normalize_target, slide_rels_path

logger = logging.getLogger(__name__)

# Data-model reference on a SmartArt graphic frame:
#   <dgm:relIds r:dm="rId4" r:lo="rId5" r:qs="rId6" r:cs="rId7"/>
_DIAGRAM_REF_RE = re.compile(r"""<dgm:relIds\b[^>]*?\br:dm=["']([^"']+)["']""")

# Chart reference on a chart graphic frame:
#   <c:chart xmlns:c="..." r:id="rId3"/>
_CHART_REF_RE = re.compile(r"""<c:chart\b[^>]*?\br:id=["']([^"']+)["']""")

_RECOVERING_PARSER = etree.XMLParser(recover=True, resolve_entities=False)

# Parts arrive already decoded, so a declared encoding must not be re-applied.
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def _relationship_elements(root):
    for elem in root.iter():
        if not isinstance(elem.tag, str):
            continue  # comments and processing instructions
        if etree.QName(elem).localname == "Relationship":
            yield elem


def parse_manifest(xml: str, part_root: str = DEFAULT_PART_ROOT) -> dict[str, str]:
    """Map relationship ids to normalized targets from manifest markup.

    Entries without an Id or Target, and external targets (hyperlinks),
    are skipped.
    """
    if not xml.strip():
        return {}
    try:
        body = _XML_DECLARATION_RE.sub("", xml, count=1)
        root = etree.fromstring(body.encode("utf-8"), parser=_RECOVERING_PARSER)
    except etree.XMLSyntaxError as e:
        logger.debug("Unreadable relationship manifest: %s", e)
        return {}
    if root is None:
        return {}

    rel_map: dict[str, str] = {}
    for rel in _relationship_elements(root):
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if not rel_id or not target:
            continue
        if rel.get("TargetMode") == "External":
            continue
        rel_map[rel_id] = normalize_target(target, part_root)
    return rel_map


def resolve(package: PresentationPackage, slide_index: int,
            part_root: str = DEFAULT_PART_ROOT) -> dict[str, str]:
    """Return the id -> target map for one slide ({} without a manifest)."""
    xml = package.read_part(slide_rels_path(slide_index, part_root))
    if xml is None:
        return {}
    return parse_manifest(xml, part_root)


def collect_reference_ids(slide_xml: str) -> list[str]:
    """Return the diagram and chart reference ids used by a slide.

    Ids are deduplicated and ordered by where they first appear in the
    markup, so diagrams and charts interleave as they do on the slide.
    """
    found = [
        (m.start(), m.group(1))
        for pattern in (_DIAGRAM_REF_RE, _CHART_REF_RE)
        for m in pattern.finditer(slide_xml)
    ]
    found.sort()

    ids: list[str] = []
    seen: set[str] = set()
    for _, ref_id in found:
        if ref_id not in seen:
            seen.add(ref_id)
            ids.append(ref_id)
    return ids
