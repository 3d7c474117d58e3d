"""Tests for the diagram tokenizer."""

import pytest

import analog_literals as al
from analog_literals import TokenType


def _types(text):
    return [t.type for t in al.tokenize(text)]


class TestSymbols:
    def test_each_symbol_maps_to_one_token(self):
        assert _types("+-|/I") == [
            TokenType.PLUS,
            TokenType.DASH,
            TokenType.PIPE,
            TokenType.SLASH,
            TokenType.LINE_MARKER,
            TokenType.EOF,
        ]

    def test_whitespace_is_discarded(self):
        assert _types(" I \n\t- -\r\n I ") == _types("I--I")

    def test_empty_input_is_just_eof(self):
        assert _types("") == [TokenType.EOF]

    def test_locations_track_lines_and_columns(self):
        tokens = al.tokenize("+--+\n  |")
        pipe = tokens[4]
        assert pipe.type is TokenType.PIPE
        assert pipe.location == al.SourceLocation(2, 3)
        assert pipe.raw == "|"


class TestComments:
    def test_block_comment_inside_drawing(self):
        assert _types("I-- /* text with + and | */ --I") == _types("I----I")

    def test_block_comments_nest(self):
        assert _types("I/* a /* b */ c */I") == _types("II")

    def test_empty_block_comment(self):
        assert _types("/ /**/ /") == [TokenType.SLASH, TokenType.SLASH, TokenType.EOF]

    def test_line_comment_runs_to_end_of_line(self):
        assert _types("+--+ // more --\n+--+") == _types("+--++--+")

    def test_unterminated_block_comment(self):
        with pytest.raises(al.MalformedDiagram, match="Unterminated comment"):
            al.tokenize("+--+ /* never closed")


class TestBadCharacters:
    @pytest.mark.parametrize("text", ["I--x--I", "i--i", "+--+ (o)", "I--é--I", "+==+"])
    def test_unknown_character_is_lexical_error(self, text):
        with pytest.raises(al.MalformedDiagram) as info:
            al.tokenize(text)
        assert info.value.kind is al.ErrorKind.LEXICAL
        assert "Unexpected character" in info.value.text

    def test_letter_gets_comment_hint(self):
        with pytest.raises(al.MalformedDiagram) as info:
            al.tokenize("+-- yes --+")
        assert "/* */" in info.value.hint
        assert info.value.location == al.SourceLocation(1, 5)

    def test_lexer_collects_every_error(self):
        source = al.SourceFile("<t>", "I x y I")
        messages = al.MessageCollector(source)
        tokens = al.Lexer(source, messages).tokenize()
        assert len(messages.errors) == 2
        assert [t.type for t in tokens] == [TokenType.LINE_MARKER, TokenType.LINE_MARKER, TokenType.EOF]
