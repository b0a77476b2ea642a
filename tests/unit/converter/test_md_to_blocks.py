"""Tests for the full Markdown-to-blocks pass and the converter wrapper."""

from __future__ import annotations

from unittest.mock import MagicMock

from notionpub.config import NotionpubConfig
from notionpub.converter.md_to_blocks import MarkdownToBlocksConverter, markdown_to_blocks
from notionpub.models import BlockNode, BlockType, ConversionResult, RichTextSpan


def _text(kind, text, *children):
    return BlockNode(kind, (RichTextSpan(text),), tuple(children))


def _bullet(text, *children):
    return _text(BlockType.BULLETED_LIST_ITEM, text, *children)


def _para(text):
    return _text(BlockType.PARAGRAPH, text)


class TestDocuments:
    def test_heading_and_nested_list(self):
        blocks = markdown_to_blocks("# Title\n- a\n  - b\n  - c\n- d")
        assert blocks == [
            _text(BlockType.HEADING_1, "Title"),
            _bullet("a", _bullet("b"), _bullet("c")),
            _bullet("d"),
        ]

    def test_mixed_document_keeps_order(self):
        md = (
            "## Overview\n"
            "\n"
            "Intro text\n"
            "---\n"
            "1. first\n"
            "2. second\n"
            "* star bullet\n"
            "### Notes"
        )
        kinds = [b.kind for b in markdown_to_blocks(md)]
        assert kinds == [
            BlockType.HEADING_2,
            BlockType.PARAGRAPH,
            BlockType.DIVIDER,
            BlockType.NUMBERED_LIST_ITEM,
            BlockType.NUMBERED_LIST_ITEM,
            BlockType.BULLETED_LIST_ITEM,
            BlockType.HEADING_3,
        ]

    def test_numbered_line_ends_bullet_list(self):
        blocks = markdown_to_blocks("- a\n1. one")
        assert [b.kind for b in blocks] == [
            BlockType.BULLETED_LIST_ITEM,
            BlockType.NUMBERED_LIST_ITEM,
        ]

    def test_indented_top_level_bullets_are_siblings(self):
        assert markdown_to_blocks("  - a\n  - b") == [_bullet("a"), _bullet("b")]

    def test_bold_line_is_not_a_bullet(self):
        blocks = markdown_to_blocks("**Key** point")
        assert blocks[0].kind is BlockType.PARAGRAPH
        assert blocks[0].rich_text[0] == RichTextSpan("Key", bold=True)

    def test_result_is_a_new_list(self):
        md = "para"
        assert markdown_to_blocks(md) is not markdown_to_blocks(md)


class TestEmptyInput:
    def test_empty_string(self):
        assert markdown_to_blocks("") == []

    def test_blank_lines_only(self):
        assert markdown_to_blocks("\n \n\t\n") == []


class TestLineEndings:
    def test_crlf(self):
        blocks = markdown_to_blocks("# T\r\n- a\r\n  - b\r\ntext\r\n")
        assert blocks == [
            _text(BlockType.HEADING_1, "T"),
            _bullet("a", _bullet("b")),
            _para("text"),
        ]


class TestComments:
    def test_single_line_comment_skipped(self):
        assert markdown_to_blocks("<!-- hidden -->\ntext") == [_para("text")]

    def test_multi_line_comment_skipped(self):
        md = "before\n<!--\nsecret\n- not a list\n-->\nafter"
        assert markdown_to_blocks(md) == [_para("before"), _para("after")]

    def test_unclosed_comment_only_swallows_its_line(self):
        assert markdown_to_blocks("<!-- open\ntext") == [_para("text")]

    def test_multi_line_comment_inside_list_dropped(self):
        md = "- a\n  <!--\n  - hidden\n  -->\n- b"
        assert markdown_to_blocks(md) == [_bullet("a"), _bullet("b")]

    def test_closing_on_opening_line(self):
        md = "<!-- a -->\n-->\nnext"
        assert markdown_to_blocks(md) == [_para("-->"), _para("next")]


class TestWarnings:
    def test_warnings_collected(self):
        warnings = []
        markdown_to_blocks(
            "x" * 50 + "\n- a\n  - b\n    - c",
            limit=10,
            warnings=warnings,
        )
        assert [w.code for w in warnings] == ["LINE_TRUNCATED", "LIST_FLATTENED"]

    def test_no_warnings_list_is_fine(self):
        assert len(markdown_to_blocks("y" * 3000)) == 1


class TestMarkdownToBlocksConverter:
    def test_convert_returns_result(self, converter):
        result = converter.convert("# Hello\n\nWorld")
        assert isinstance(result, ConversionResult)
        assert [b.kind.value for b in result.blocks] == ["heading_1", "paragraph"]
        assert result.warnings == []

    def test_uses_configured_line_length(self):
        converter = MarkdownToBlocksConverter(NotionpubConfig(max_line_length=10))
        result = converter.convert("z" * 20)
        assert result.blocks[0].plain_text == "zzzzzzz..."
        assert [w.code for w in result.warnings] == ["LINE_TRUNCATED"]

    def test_warning_metrics(self):
        metrics = MagicMock()
        converter = MarkdownToBlocksConverter(NotionpubConfig(metrics=metrics))
        converter.convert("- a\n  - b\n    - c\n  note")
        tags = [c.kwargs["tags"]["code"] for c in metrics.increment.call_args_list]
        assert tags == ["LIST_FLATTENED", "LIST_CONTENT_SKIPPED"]
        for c in metrics.increment.call_args_list:
            assert c.args[0] == "notionpub.conversion_warnings_total"

    def test_to_notion_payload(self, converter):
        payload = converter.convert("---\n- a").to_notion()
        assert payload == [
            {"object": "block", "type": "divider", "divider": {}},
            {
                "object": "block",
                "type": "bulleted_list_item",
                "bulleted_list_item": {
                    "rich_text": [{"type": "text", "text": {"content": "a"}}],
                },
            },
        ]

    def test_debug_dump(self, capsys):
        converter = MarkdownToBlocksConverter(NotionpubConfig(debug_dump_payload=True))
        converter.convert("# Dumped")
        err = capsys.readouterr().err
        assert "Notion blocks payload" in err
        assert '"heading_1"' in err

    def test_no_dump_by_default(self, converter, capsys):
        converter.convert("# Quiet")
        assert "Notion blocks payload" not in capsys.readouterr().err
