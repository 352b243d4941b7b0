"""Tests for the text-run scanner."""

import pytest

from conftest import paragraph, part_xml, slide_xml
from src.extractor.text_scanner import scan, scan_part


# ---------------------------------------------------------------------------
# Paragraph strategy
# ---------------------------------------------------------------------------

class TestParagraphStrategy:
    def test_runs_concatenated_per_paragraph(self):
        xml = slide_xml(paragraph("Hello ", "World"), paragraph("Second"))
        assert scan(xml) == ["Hello World", "Second"]

    @pytest.mark.parametrize("n_paragraphs,n_runs", [(1, 1), (3, 2), (5, 4)])
    def test_one_line_per_paragraph(self, n_paragraphs, n_runs):
        paragraphs = [
            paragraph(*[f"p{p}r{r}" for r in range(n_runs)])
            for p in range(n_paragraphs)
        ]
        lines = scan(slide_xml(*paragraphs))
        assert len(lines) == n_paragraphs
        assert lines[-1] == "".join(f"p{n_paragraphs - 1}r{r}" for r in range(n_runs))

    def test_paragraph_without_runs_contributes_nothing(self):
        xml = slide_xml(paragraph("Title"), "<a:p><a:pPr/><a:endParaRPr/></a:p>",
                        paragraph("Body"))
        assert scan(xml) == ["Title", "Body"]

    def test_self_closing_paragraph_ignored(self):
        xml = slide_xml("<a:p/>", paragraph("Only"))
        assert scan(xml) == ["Only"]

    def test_self_closing_paragraph_with_space_ignored(self):
        xml = slide_xml(paragraph("A"), "<a:p />", paragraph("B"))
        assert scan(xml) == ["A", "B"]

    def test_self_closing_paragraph_with_attributes_ignored(self):
        xml = '<a:p lvl="1"/><a:p><a:r><a:t>B</a:t></a:r></a:p>'
        assert scan(xml) == ["B"]

    def test_paragraph_with_attributes(self):
        xml = slide_xml(paragraph("Indented", attrs='lvl="1"'))
        assert scan(xml) == ["Indented"]

    def test_paragraph_spanning_lines(self):
        xml = "<a:p>\n  <a:r>\n    <a:t>Multi</a:t>\n  </a:r>\n  <a:r><a:t>line</a:t></a:r>\n</a:p>"
        assert scan(xml) == ["Multiline"]

    def test_text_run_with_attributes(self):
        xml = '<a:p><a:r><a:t xml:space="preserve">  spaced  </a:t></a:r></a:p>'
        assert scan(xml) == ["  spaced  "]

    def test_entities_left_verbatim(self):
        xml = "<a:p><a:r><a:t>R&amp;D</a:t></a:r></a:p>"
        assert scan(xml) == ["R&amp;D"]

    def test_empty_runs_only_contributes_nothing(self):
        xml = "<a:p><a:r><a:t></a:t></a:r></a:p><a:p><a:r><a:t>x</a:t></a:r></a:p>"
        assert scan(xml) == ["x"]

    def test_similar_tags_not_matched(self):
        xml = (
            "<a:p><a:r><a:t>Cell</a:t></a:r><a:tab/></a:p>"
            "<a:tbl><a:tr><a:tc><a:txBody><a:p><a:r><a:t>A1</a:t></a:r></a:p>"
            "</a:txBody></a:tc></a:tr></a:tbl>"
        )
        assert scan(xml) == ["Cell", "A1"]

    def test_document_order(self):
        xml = slide_xml(paragraph("one"), paragraph("two"), paragraph("three"))
        assert scan(xml) == ["one", "two", "three"]


# ---------------------------------------------------------------------------
# Flat fallback
# ---------------------------------------------------------------------------

class TestFlatFallback:
    def test_bare_runs_become_separate_lines(self):
        xml = "<root><a:t>alpha</a:t><x/><a:t>beta</a:t><a:t>gamma</a:t></root>"
        assert scan(xml) == ["alpha", "beta", "gamma"]

    def test_not_used_when_paragraphs_yield_lines(self):
        # The stray run outside any paragraph is not picked up.
        xml = "<root><a:t>stray</a:t>" + paragraph("inside") + "</root>"
        assert scan(xml) == ["inside"]

    def test_used_when_paragraphs_have_no_runs(self):
        xml = "<root><a:p><a:pPr/></a:p><a:t>loose</a:t></root>"
        assert scan(xml) == ["loose"]

    def test_truncated_document(self):
        xml = "<a:r><a:t>first</a:t></a:r><a:r><a:t>second</a:t></a:r><a:p><a:r><a:t>cut"
        assert scan(xml) == ["first", "second"]


class TestEmptyInput:
    def test_empty_string(self):
        assert scan("") == []

    def test_no_text(self):
        assert scan(slide_xml()) == []


# ---------------------------------------------------------------------------
# Part scanning
# ---------------------------------------------------------------------------

class TestScanPart:
    def test_reads_part(self, make_package):
        package = make_package({"ppt/charts/chart1.xml": part_xml(paragraph("Q1 Revenue"))})
        assert scan_part(package, "ppt/charts/chart1.xml") == ["Q1 Revenue"]

    def test_missing_part_is_empty(self, make_package):
        package = make_package({"ppt/slides/slide1.xml": slide_xml()})
        assert scan_part(package, "ppt/charts/chart9.xml") == []
