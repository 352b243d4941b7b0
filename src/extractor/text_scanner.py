"""Text-run scanner — pulls paragraph text out of raw DrawingML markup.

Slide, chart and diagram-data parts all carry their visible text in
``<a:t>`` runs grouped under ``<a:p>`` paragraphs.  Rather than parsing
each part as XML, the scanner matches that small vocabulary directly so it
keeps working on truncated or otherwise malformed parts.

Two strategies, chosen once per document:

    paragraph  Every <a:p> span yields one line: the concatenation of the
               <a:t> runs inside it.  Paragraphs without text are dropped.
    flat       Used only when no paragraph produced a line.  Every <a:t>
               run anywhere in the document becomes its own line.
"""

import logging
import re

from src.container import PresentationPackage

logger = logging.getLogger(__name__)

# <a:p> or <a:p attr="..."> through the nearest </a:p>.  <a:pPr> and the
# self-closing <a:p/> or <a:p /> do not match.
_PARAGRAPH_RE = re.compile(r"<a:p(?:\s[^>]*)?(?<!/)>(.*?)</a:p>", re.DOTALL)

# Literal character content of a text run; never crosses a tag.
_TEXT_RUN_RE = re.compile(r"<a:t(?:\s[^>]*)?(?<!/)>([^<]*)</a:t>")


def _paragraph_lines(xml: str) -> list[str]:
    lines = []
    for paragraph in _PARAGRAPH_RE.finditer(xml):
        line = "".join(_TEXT_RUN_RE.findall(paragraph.group(1)))
        if line:
            lines.append(line)
    return lines


def _flat_lines(xml: str) -> list[str]:
    return [run for run in _TEXT_RUN_RE.findall(xml) if run]


def scan(xml: str) -> list[str]:
    """Return the text lines of one XML part, in document order."""
    lines = _paragraph_lines(xml)
    if lines:
        return lines
    return _flat_lines(xml)


def scan_part(package: PresentationPackage, path: str) -> list[str]:
    """Scan a named part; a part the package does not contain yields []."""
    xml = package.read_part(path)
    if xml is None:
        return []
    lines = scan(xml)
    logger.debug("Scanned %s: %d line(s)", path, len(lines))
    return lines
