"""Shared fixtures: in-memory presentation packages built from XML snippets."""

import io
import zipfile

import pytest

from src.container import open_package

NS = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"'
)


def paragraph(*runs, attrs=""):
    """An <a:p> holding one <a:r><a:t> per run."""
    body = "".join(f"<a:r><a:rPr lang=\"en-US\"/><a:t>{r}</a:t></a:r>" for r in runs)
    open_tag = f"<a:p {attrs}>" if attrs else "<a:p>"
    return f"{open_tag}<a:pPr algn=\"l\"/>{body}</a:p>"


def slide_xml(*fragments):
    """A slide part wrapping the given shape-tree fragments."""
    inner = "".join(fragments)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f"<p:sld {NS}><p:cSld><p:spTree>"
        f"<p:sp><p:txBody><a:bodyPr/>{inner}</p:txBody></p:sp>"
        "</p:spTree></p:cSld></p:sld>"
    )


def chart_frame(rel_id):
    return (
        '<p:graphicFrame><a:graphic><a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/chart">'
        '<c:chart xmlns:c="http://schemas.openxmlformats.org/drawingml/2006/chart" '
        f'r:id="{rel_id}"/></a:graphicData></a:graphic></p:graphicFrame>'
    )


def diagram_frame(dm_id, lo_id="rId90", qs_id="rId91", cs_id="rId92"):
    return (
        '<p:graphicFrame><a:graphic><a:graphicData uri="http://schemas.openxmlformats.org/drawingml/2006/diagram">'
        '<dgm:relIds xmlns:dgm="http://schemas.openxmlformats.org/drawingml/2006/diagram" '
        f'r:dm="{dm_id}" r:lo="{lo_id}" r:qs="{qs_id}" r:cs="{cs_id}"/>'
        "</a:graphicData></a:graphic></p:graphicFrame>"
    )


def rels_xml(*entries):
    """A relationship manifest from (id, target) or (id, target, mode) tuples."""
    rels = []
    for entry in entries:
        rel_id, target = entry[0], entry[1]
        mode = f' TargetMode="{entry[2]}"' if len(entry) > 2 else ""
        rels.append(
            f'<Relationship Id="{rel_id}" '
            'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/chart" '
            f'Target="{target}"{mode}/>'
        )
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        + "".join(rels)
        + "</Relationships>"
    )


def part_xml(*paragraphs):
    """A chart or diagram-data part holding the given paragraphs."""
    return f"<root {NS}>{''.join(paragraphs)}</root>"


def zip_bytes(parts):
    """Zip a {path: text-or-bytes} mapping into package bytes."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as z:
        for path, content in parts.items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            z.writestr(path, content)
    return buf.getvalue()


CORRUPT_MARKER = "crc-check"


def zip_bytes_bad_crc(parts, bad_path):
    """Zip parts uncompressed, then flip one byte of bad_path's stored data.

    The member still lists and opens, but reading it fails the CRC check.
    bad_path's content must contain CORRUPT_MARKER.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_STORED) as z:
        for path, content in parts.items():
            z.writestr(path, content)
    data = buf.getvalue()
    marker = CORRUPT_MARKER.encode()
    assert data.count(marker) == 1, "marker must appear in exactly one part"
    assert CORRUPT_MARKER in parts[bad_path]
    return data.replace(marker, marker.upper())


@pytest.fixture
def make_package():
    """Factory: {path: content} -> open PresentationPackage (closed on teardown).

    With corrupt=path, that part fails its CRC check when read.
    """
    opened = []

    def _make(parts, corrupt=None):
        if corrupt:
            package = open_package(zip_bytes_bad_crc(parts, corrupt))
        else:
            package = open_package(zip_bytes(parts))
        opened.append(package)
        return package

    yield _make
    for package in opened:
        package.close()
