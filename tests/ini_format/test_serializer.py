import pytest

from core import Entry, IniDocument, Section
from ini_format import parser as ini_parser, serializer as ini_serializer


# ===========================================================
# Serialization
# ===========================================================

class TestFormatEntry:

    def test_plain(self):
        assert ini_serializer.format_entry("k", Entry("v")) == ["k=v"]

    def test_with_comment(self):
        assert ini_serializer.format_entry("k", Entry("v", "note")) == ["; note", "k=v"]

    def test_empty_comment_not_written(self):
        assert ini_serializer.format_entry("k", Entry("v", "")) == ["k=v"]

    def test_quotes_written_as_stored(self):
        assert ini_serializer.format_entry("k", Entry('"a b"')) == ['k="a b"']


class TestSerializeSection:

    def test_layout(self):
        section = Section("A", {"x": Entry("1"), "y": Entry("2", "why")})
        lines = ini_serializer.serialize_section(section, ("# about A",))
        assert lines == ["# about A", "[A]", "x=1", "; why", "y=2", ""]

    def test_empty_section(self):
        assert ini_serializer.serialize_section(Section("E")) == ["[E]", ""]


class TestSerializeDocument:

    def test_empty_document(self):
        assert ini_serializer.serialize(IniDocument()) == []

    def test_order_and_blank_after_each_section(self):
        doc = IniDocument()
        doc.set_entry("B", "k", Entry("1"))
        doc.set_entry("A", "k", Entry("2"))
        assert ini_serializer.serialize(doc) == ["[B]", "k=1", "", "[A]", "k=2", ""]

    def test_section_comments_precede_header(self):
        doc = IniDocument()
        doc.set_entry("A", "k", Entry("1"))
        doc.add_section_comment("A", "; first")
        doc.add_section_comment("A", "// second")
        assert ini_serializer.serialize(doc)[:3] == ["; first", "// second", "[A]"]

    def test_dangling_comments_not_written(self):
        doc = IniDocument()
        doc.set_entry("A", "k", Entry("1"))
        doc.add_section_comment("Ghost", "; never shown")
        assert "; never shown" not in ini_serializer.serialize(doc)

    def test_key_comment_always_semicolon(self):
        doc = ini_parser.parse(["[A]", "k=1"])
        doc.get_entry("A", "k").comment = "explained"
        assert ini_serializer.serialize(doc) == ["[A]", "; explained", "k=1", ""]


# ===========================================================
# Round-trip: parse → serialize → parse
# ===========================================================

class TestRoundTrip:

    @pytest.mark.parametrize("lines", [
        ["[A]", "x=1", ""],
        ["[A]", 'y="q"', "[B]"],
        ["[A]", "", "[B]", "k=v w", ""],
    ])
    def test_canonical_text_is_stable(self, lines):
        # Canonical output with no trailing comments re-parses to itself
        doc = ini_parser.parse(lines)
        assert ini_serializer.serialize(ini_parser.parse(ini_serializer.serialize(doc))) \
            == ini_serializer.serialize(doc)

    def test_comment_moves_above_previous_header(self):
        # A comment between sections belongs to the section before it
        doc = ini_parser.parse(["[A]", "x=1", "; about B", "[B]", "y=2"])
        assert ini_serializer.serialize(doc) == [
            "; about B", "[A]", "x=1", "", "[B]", "y=2", "",
        ]

    def test_first_section_comments_lost_on_reload(self):
        # Written above the first header, they precede every section
        doc = ini_parser.parse(["[A]", "x=1", "; about B", "[B]", "y=2"])
        reloaded = ini_parser.parse(ini_serializer.serialize(doc))
        assert reloaded.section_comments("A") == ()

    def test_quotes_lost_after_parse(self):
        doc = ini_parser.parse(["[A]", 'k="spaced value"'])
        assert ini_serializer.serialize(doc) == ["[A]", "k=spaced value", ""]
