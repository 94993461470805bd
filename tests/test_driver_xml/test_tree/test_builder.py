"""Tests for the tree builder."""

import logging

import pytest

from driver_xml.shared.config import ParserConfig
from driver_xml.shared.errors import (
    DepthLimitExceeded,
    InvalidArgument,
    MalformedMarkup,
    TagMismatch,
    UnexpectedEndOfFile,
)
from driver_xml.shared.result import DiagnosticSeverity
from driver_xml.tree.builder import ParseResult, XMLTreeBuilder
from driver_xml.tree.nodes import (
    CharData,
    EmptyTag,
    ProcessingInstruction,
    Tag,
)


def build(document: bytes, **config) -> ParseResult:
    return XMLTreeBuilder(ParserConfig(**config)).build(document)


class TestTreeShape:
    """Test the structure of successfully built trees."""

    def test_synthetic_root(self) -> None:
        result = build(b"<a/>")
        assert result.root.name == "Root"
        assert result.root.synthetic
        assert result.root.owner is None

    def test_custom_root_name(self) -> None:
        assert build(b"<a/>", root_name="Document").root.name == "Document"

    def test_nested_tags(self) -> None:
        root = build(b"<a><b></b></a>").root
        (a,) = root.children
        assert isinstance(a, Tag) and a.name == "a"
        (b,) = a.children
        assert isinstance(b, Tag) and b.name == "b"
        assert len(b.children) == 0

    def test_node_kinds(self) -> None:
        root = build(b'<?xml version="1.0"?><a x="1">text<b/><?go now?></a>').root
        pi, a = root.children
        assert isinstance(pi, ProcessingInstruction)
        assert (pi.target, pi.data) == ("xml", b'version="1.0"')
        text, b, inner_pi = a.children
        assert isinstance(text, CharData) and text.data == b"text"
        assert isinstance(b, EmptyTag)
        assert inner_pi.data == b"now"
        assert a.attributes[0].value == b"1"

    def test_empty_attribute_value(self) -> None:
        a = build(b'<a x=""/>').root.children[0]
        assert a.attributes[0].value == b""

    def test_multiple_top_level_nodes(self) -> None:
        root = build(b"<a/>middle<b/>").root
        assert [type(n).__name__ for n in root.children] == ["EmptyTag", "CharData", "EmptyTag"]

    def test_whitespace_between_markup_dropped(self) -> None:
        a = build(b"<a>\n  <b/>\n</a>\n").root.children[0]
        assert len(a.children) == 1

    def test_text_keeps_leading_whitespace(self) -> None:
        a = build(b"<a>  x </a>").root.children[0]
        assert a.children[0].data == b"  x "

    def test_comments_and_declarations_discarded(self) -> None:
        result = build(b"<!DOCTYPE a><a><!-- note --><![CDATA[x]]></a>")
        a = result.root.children[0]
        assert len(a.children) == 0
        assert result.statistics.comments_discarded == 1
        assert result.statistics.declarations_discarded == 2

    def test_owners_are_consistent(self) -> None:
        root = build(b"<a><b><c/></b>t</a>").root
        a = root.children[0]
        assert a.owner is root.children
        b = a.children[0]
        assert b.owner is a.children
        assert b.children[0].owner is b.children


class TestEmptyDocuments:
    """Test documents that produce no nodes."""

    @pytest.mark.parametrize("document", [b"", b"   \n", b"<!-- only a comment -->"])
    def test_no_nodes(self, document: bytes) -> None:
        result = build(document)
        assert len(result.root.children) == 0
        infos = result.get_diagnostics_by_severity(DiagnosticSeverity.INFO)
        assert [d.message for d in infos] == ["Document contains no nodes"]

    def test_length_limits_document(self) -> None:
        result = XMLTreeBuilder().build(b"<a/><b/>", length=4)
        assert [n.name for n in result.root.children] == ["a"]

    def test_invalid_buffer(self) -> None:
        with pytest.raises(InvalidArgument):
            XMLTreeBuilder().build("<a/>")


class TestStructuralErrors:
    """Test fatal structure problems."""

    def test_mismatched_close_tag(self) -> None:
        with pytest.raises(TagMismatch) as exc_info:
            build(b"<a><b></a></b>")
        error = exc_info.value
        assert error.expected == "b"
        assert error.found == "a"
        assert error.position == 6

    def test_unclosed_tag(self) -> None:
        with pytest.raises(UnexpectedEndOfFile, match=r"Unclosed tag <a>"):
            build(b"<a><b></b>")

    def test_close_tag_at_top_level(self) -> None:
        with pytest.raises(TagMismatch, match="has no matching open tag"):
            build(b"<a/></b>")

    def test_partial_tree_attached(self) -> None:
        with pytest.raises(UnexpectedEndOfFile) as exc_info:
            build(b"<a><b/>")
        error = exc_info.value
        assert error.partial_root is not None
        a = error.partial_root.children[0]
        assert a.children[0].name == "b"
        assert error.diagnostics[-1].severity == DiagnosticSeverity.ERROR
        assert error.diagnostics[-1].details == {"error_type": "UnexpectedEndOfFile"}

    def test_bad_tag_name_position_is_document_offset(self) -> None:
        with pytest.raises(MalformedMarkup) as exc_info:
            build(b"<a><b!c/></a>")
        assert exc_info.value.position == 5

    def test_close_tag_with_attributes(self) -> None:
        with pytest.raises(MalformedMarkup, match="Unexpected content in close tag") as exc_info:
            build(b'<a></a x="1">')
        assert exc_info.value.position == 7

    def test_close_tag_with_trailing_space(self) -> None:
        root = build(b"<a></a  >").root
        assert root.children[0].name == "a"

    def test_bad_pi_target(self) -> None:
        with pytest.raises(MalformedMarkup):
            build(b"<a><?1x?></a>")

    def test_error_is_logged(self, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            with pytest.raises(TagMismatch):
                build(b"<a></b>")
        assert any("Tree building failed" in r.getMessage() for r in caplog.records)


class TestMalformedAttributes:
    """Test recovery from tags whose attributes do not parse."""

    def test_element_dropped_with_warning(self) -> None:
        result = build(b"<a><b x></b><c/></a>")
        a = result.root.children[0]
        assert [child.name for child in a.children] == ["c"]
        assert result.has_warnings
        (warning,) = result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
        assert "Dropped <b>" in warning.message
        assert warning.position == 3
        assert result.statistics.elements_dropped == 1

    def test_dropped_tag_content_consumed(self) -> None:
        result = build(b"<a><b x='1><c/>text</b>tail</a>")
        a = result.root.children[0]
        assert len(a.children) == 1
        assert a.children[0].data == b"tail"

    def test_dropped_empty_tag(self) -> None:
        result = build(b'<a><b y=2/><c/></a>')
        assert [n.name for n in result.root.children[0].children] == ["c"]

    def test_strict_mode_raises(self) -> None:
        with pytest.raises(MalformedMarkup, match="missing '='") as exc_info:
            XMLTreeBuilder(ParserConfig.strict()).build(b"<a><b x></b></a>")
        assert exc_info.value.position == 7


class TestDepthLimit:
    """Test the nesting depth cap."""

    def test_within_limit(self) -> None:
        result = build(b"<a><b><c/></b></a>", max_depth=2)
        assert result.statistics.max_depth == 2

    def test_exceeding_limit(self) -> None:
        with pytest.raises(DepthLimitExceeded, match="maximum nesting depth of 2"):
            build(b"<a><b><c></c></b></a>", max_depth=2)

    def test_deep_document_default_limit(self) -> None:
        depth = 300
        document = b"<n>" * depth + b"</n>" * depth
        with pytest.raises(DepthLimitExceeded):
            build(document)

    def test_lenient_has_no_depth_cap(self) -> None:
        depth = 2000
        document = b"<n>" * depth + b"<leaf/>" + b"</n>" * depth
        result = XMLTreeBuilder(ParserConfig.lenient()).build(document)
        assert result.statistics.max_depth == depth
        assert result.element_count == depth + 1

    def test_depth_error_keeps_partial_tree(self) -> None:
        document = b"<n>" * 5 + b"</n>" * 5
        with pytest.raises(DepthLimitExceeded) as exc_info:
            build(document, max_depth=3)
        assert exc_info.value.partial_root is not None
        assert exc_info.value.position == 12

    def test_lenient_allows_moderate_depth(self) -> None:
        depth = 300
        document = b"<n>" * depth + b"</n>" * depth
        result = XMLTreeBuilder(ParserConfig.lenient()).build(document)
        assert result.statistics.max_depth == depth


class TestParseResult:
    """Test ParseResult helpers and statistics."""

    def test_statistics(self) -> None:
        document = b"<a><b/>x</a>"
        result = build(document)
        stats = result.statistics
        assert stats.bytes_processed == len(document)
        assert stats.nodes_created == 3
        assert stats.chunks_extracted == 4
        assert stats.max_depth == 1

    def test_element_count_excludes_root(self) -> None:
        assert build(b"<a><b/><c></c></a>").element_count == 3

    def test_add_diagnostic_uses_correlation_id(self) -> None:
        result = XMLTreeBuilder(correlation_id="req-1").build(b"<a/>")
        entry = result.add_diagnostic(DiagnosticSeverity.INFO, "note", "test")
        assert entry.correlation_id == "req-1"
        assert result.correlation_id == "req-1"

    def test_to_dict(self) -> None:
        data = build(b"<a/>").to_dict()
        assert data["element_count"] == 1
        assert data["root"]["name"] == "Root"
        assert data["root"]["children"] == [
            {"type": "empty_tag", "name": "a", "attributes": []}
        ]
        assert data["statistics"]["elements_dropped"] == 0

    def test_parse_branch_outside_build(self) -> None:
        with pytest.raises(RuntimeError):
            XMLTreeBuilder().parse_branch(Tag("a"))
