"""Tests for frontmatter.py: header detection, line grammar and round trips."""

import pytest

from sitegen.errors import FrontMatterError, MissingFrontMatterError
from sitegen.frontmatter import parse_frontmatter, parse_metadata, serialize_frontmatter


class TestHeaderDetection:
    """The document must open with a --- delimited block."""

    def test_missing_header_raises(self):
        with pytest.raises(MissingFrontMatterError):
            parse_frontmatter("# Just a heading\n\nBody text.\n")

    def test_unterminated_header_raises(self):
        with pytest.raises(MissingFrontMatterError):
            parse_frontmatter("---\ntitle: x\nbody without closing\n")

    def test_missing_header_is_a_front_matter_error(self):
        with pytest.raises(FrontMatterError):
            parse_frontmatter("")

    def test_body_is_trimmed(self):
        meta, body = parse_frontmatter("---\ntitle: A\n---\n\n\nHello\n\n")
        assert meta == {"title": "A"}
        assert body == "Hello"

    def test_crlf_documents_parse(self):
        meta, body = parse_frontmatter("---\r\ntitle: A\r\ntags:\r\n- x\r\n---\r\nBody\r\n")
        assert meta == {"title": "A", "tags": ["x"]}
        assert body == "Body"

    def test_closing_delimiter_at_end_of_file(self):
        meta, body = parse_frontmatter("---\ntitle: A\n---")
        assert meta == {"title": "A"}
        assert body == ""


class TestMetadataGrammar:
    """Line-oriented scalar / array parsing."""

    def test_scalar_quotes_stripped_once(self):
        meta = parse_metadata('title: "Tech Review"\nsub: \'single\'\nraw: ""quoted""')
        assert meta["title"] == "Tech Review"
        assert meta["sub"] == "single"
        assert meta["raw"] == '"quoted"'

    def test_unbalanced_quote_kept(self):
        assert parse_metadata('title: "Tech Review')["title"] == '"Tech Review'

    def test_value_keeps_text_after_first_colon(self):
        assert parse_metadata("title: Q1: Results")["title"] == "Q1: Results"

    def test_array_accumulates_in_order(self):
        meta = parse_metadata("tags:\n  - ai\n  - semiconductors\n  - cloud")
        assert meta["tags"] == ["ai", "semiconductors", "cloud"]

    def test_array_closed_before_next_key(self):
        meta = parse_metadata("tags:\n- a\n- b\ntitle: T\n- stray")
        assert meta == {"tags": ["a", "b"], "title": "T"}

    def test_consecutive_arrays_do_not_leak(self):
        meta = parse_metadata("tags:\n- a\nkeywords:\n- k1\n- k2\ndate: 2024-01-01")
        assert meta["tags"] == ["a"]
        assert meta["keywords"] == ["k1", "k2"]
        assert meta["date"] == "2024-01-01"

    def test_empty_key_at_end_is_empty_list(self):
        assert parse_metadata("title: T\ntags:")["tags"] == []

    def test_items_after_scalar_are_ignored(self):
        assert parse_metadata("title: T\n- nope") == {"title": "T"}

    def test_blank_lines_and_unknown_keys(self):
        meta = parse_metadata("\n\ntitle: T\n\nlayout: wide\n\n")
        assert meta == {"title": "T", "layout": "wide"}

    def test_array_items_kept_verbatim(self):
        meta = parse_metadata('tags:\n- "AI"\n- \'c\'\n-  spaced\ntitle: "Half')
        assert meta["tags"] == ['"AI"', "'c'", " spaced"]
        assert meta["title"] == '"Half'


class TestRoundTrip:
    """serialize_frontmatter writes what parse_frontmatter reads."""

    @pytest.mark.parametrize("meta", [
        {"title": "Tech Review", "date": "2024-03-01", "tags": ["ai", "semiconductors"]},
        {"title": "  padded  ", "description": '"quoted" start', "tags": []},
        {"title": "- dash", "series": "Q1: Earnings", "tags": ["- odd", "x: y", '"quoted"']},
        {"title": "주식 투자", "category": "stocks"},
    ])
    def test_round_trip(self, meta):
        parsed, body = parse_frontmatter(serialize_frontmatter(meta, "Body"))
        assert parsed == meta
        assert list(parsed) == list(meta)
        assert body == "Body"
