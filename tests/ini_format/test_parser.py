import pytest

from core import Entry, LineKind
from ini_format import parser as ini_parser


# ===========================================================
# is_comment / is_empty / is_section_header
# ===========================================================

class TestParserTrivial:

    @pytest.mark.parametrize("line", ["; c", "# c", "// c", "/ c", "  ;indented"])
    def test_comment(self, line):
        assert ini_parser.is_comment(line)

    def test_not_comment(self):
        assert not ini_parser.is_comment("key=value ; trailing")

    def test_empty(self):
        assert ini_parser.is_empty("")
        assert ini_parser.is_empty("   \t")

    def test_section_header(self):
        assert ini_parser.is_section_header("  [Main]  ")
        assert not ini_parser.is_section_header("[Main")

    @pytest.mark.parametrize("raw, expected", [
        ('"quoted"', "quoted"),
        ('""', ""),
        ('"', '"'),
        ('""x""', '"x"'),
        ('"left', '"left'),
        ("plain", "plain"),
    ])
    def test_unquote(self, raw, expected):
        assert ini_parser.unquote(raw) == expected


# ===========================================================
# parse_line — tagged outcomes
# ===========================================================

class TestParseLine:

    def test_comment_is_trimmed(self):
        parsed = ini_parser.parse_line("   ; hello  ")
        assert parsed.kind is LineKind.COMMENT
        assert parsed.text == "; hello"

    def test_single_slash_is_comment(self):
        assert ini_parser.parse_line("/not really a path").kind is LineKind.COMMENT

    def test_empty(self):
        assert ini_parser.parse_line("  ").kind is LineKind.EMPTY

    def test_section(self):
        parsed = ini_parser.parse_line(" [My Section] ")
        assert parsed.kind is LineKind.SECTION
        assert parsed.name == "My Section"

    def test_entry(self):
        parsed = ini_parser.parse_line("  Key  =  Value  ")
        assert parsed.kind is LineKind.ENTRY
        assert parsed.key == "Key"
        assert parsed.value == "Value"

    def test_entry_splits_on_first_equals(self):
        parsed = ini_parser.parse_line("expr=a=b")
        assert parsed.key == "expr"
        assert parsed.value == "a=b"

    def test_entry_strips_one_layer_of_quotes(self):
        parsed = ini_parser.parse_line('Title = "Hello World"')
        assert parsed.value == "Hello World"

    def test_empty_value(self):
        parsed = ini_parser.parse_line("Key=")
        assert parsed.kind is LineKind.ENTRY
        assert parsed.value == ""

    def test_no_equals_is_ignored(self):
        parsed = ini_parser.parse_line("just some text")
        assert parsed.kind is LineKind.IGNORED

    def test_unclosed_header_is_ignored(self):
        assert ini_parser.parse_line("[Broken").kind is LineKind.IGNORED


# ===========================================================
# parse — documents
# ===========================================================

class TestParseDocument:

    def test_sections_and_entries(self):
        doc = ini_parser.parse([
            "[A]",
            "x=1",
            "y = 2",
            "[B]",
            "z=3",
        ])
        assert doc.section_names == ("A", "B")
        assert doc.get_entry("A", "x") == Entry("1")
        assert doc.get_entry("A", "y") == Entry("2")
        assert doc.get_entry("B", "z") == Entry("3")

    def test_leading_comments_are_dropped(self):
        doc = ini_parser.parse(["; top comment", "[A]", "X=1"])
        assert doc.section_names == ("A",)
        assert doc.get_entry("A", "X").value == "1"
        assert doc.section_comments("A") == ()

    def test_comments_attach_to_current_section(self):
        doc = ini_parser.parse([
            "[A]",
            "x=1",
            "; between",
            "[B]",
            "y=2",
            "# trailing",
        ])
        assert doc.section_comments("A") == ("; between",)
        assert doc.section_comments("B") == ("# trailing",)

    def test_comment_before_key_becomes_section_comment(self):
        doc = ini_parser.parse(["[A]", "; about x", "x=1"])
        assert doc.get_entry("A", "x").comment is None
        assert doc.section_comments("A") == ("; about x",)

    def test_blank_lines_do_not_flush_comments(self):
        doc = ini_parser.parse(["[A]", "; one", "", "   ", "; two", "[B]"])
        assert doc.section_comments("A") == ("; one", "; two")

    def test_every_parsed_section_has_comment_list(self):
        doc = ini_parser.parse(["[A]", "[B]"])
        assert doc.commented_names == ("A", "B")

    def test_repeated_section_merges_entries(self):
        doc = ini_parser.parse(["[A]", "x=1", "[B]", "y=2", "[A]", "x=3", "z=4"])
        assert doc.section_names == ("A", "B")
        assert list(doc.get_section("A")) == ["x", "z"]
        assert doc.get_entry("A", "x").value == "3"

    def test_duplicate_key_last_wins(self):
        doc = ini_parser.parse(["[A]", "k=1", "k=2"])
        assert doc.get_entry("A", "k").value == "2"

    def test_entry_before_any_section_is_ignored(self):
        doc, counts = ini_parser.parse_lines(["orphan=1", "[A]", "x=1"])
        assert doc.section_names == ("A",)
        assert counts[LineKind.IGNORED] == 1

    def test_malformed_lines_are_skipped(self):
        doc, counts = ini_parser.parse_lines(["[A]", "garbage", "x=1", "[oops"])
        assert list(doc.get_section("A")) == ["x"]
        assert counts[LineKind.IGNORED] == 2

    def test_counts_per_kind(self):
        _, counts = ini_parser.parse_lines(["; c", "", "[A]", "x=1", "y=2", "junk"])
        assert counts[LineKind.COMMENT] == 1
        assert counts[LineKind.EMPTY] == 1
        assert counts[LineKind.SECTION] == 1
        assert counts[LineKind.ENTRY] == 2
        assert counts[LineKind.IGNORED] == 1

    def test_empty_input(self):
        doc = ini_parser.parse([])
        assert len(doc) == 0

    def test_empty_bracket_name(self):
        doc = ini_parser.parse(["[]", "x=1"])
        assert doc.section_names == ("",)
        assert doc.get_entry("", "x").value == "1"

    def test_accepts_generator(self):
        doc = ini_parser.parse(line for line in ["[A]", "x=1"])
        assert doc.get_entry("A", "x").value == "1"
