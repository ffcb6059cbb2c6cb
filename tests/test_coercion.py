"""
Unit tests for cell text coercion.
"""

import pytest

from exceptions import ValueParseError
from parsers.coercion import parse_bool, parse_int, parse_int_list, split_and_strip


class TestParseInt:

    def test_plain_and_padded(self):
        assert parse_int("42", "blue link points") == 42
        assert parse_int("  7 \n", "blue link points") == 7

    def test_signed(self):
        assert parse_int("-3", "red adjustments") == -3
        assert parse_int("+3", "red adjustments") == 3

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "1 2", "12pts", "١٠٠", "８０", "²"])
    def test_rejects_non_integers(self, text):
        with pytest.raises(ValueParseError) as exc_info:
            parse_int(text, "blue final score", side="blue")

        exc = exc_info.value
        assert "blue final score" in exc.message
        assert exc.side == "blue"
        assert exc.text == text.strip()


class TestSplitAndStrip:

    def test_splits_and_strips_tokens(self):
        assert split_and_strip(" 254 \n 1678\n971 ", "\n") == ["254", "1678", "971"]

    def test_drops_leading_and_trailing_empties(self):
        assert split_and_strip("\n\n254\n1678\n\n", "\n") == ["254", "1678"]

    def test_keeps_inner_empties(self):
        assert split_and_strip("1••2", "•") == ["1", "", "2"]

    def test_empty_input(self):
        assert split_and_strip("", "\n") == []
        assert split_and_strip(None, "\n") == []
        assert split_and_strip("   ", "•") == []


class TestParseIntList:

    def test_bullet_split(self):
        assert parse_int_list("2•1", "•", 2, "blue fouls/techs committed") == [2, 1]
        assert parse_int_list(" 0 • 3 ", "•", 2, "red fouls/techs committed") == [0, 3]

    def test_wrong_token_count(self):
        with pytest.raises(ValueParseError) as exc_info:
            parse_int_list("2", "•", 2, "blue fouls/techs committed", side="blue")
        assert "expected 2 values" in exc_info.value.message

    def test_bad_token(self):
        with pytest.raises(ValueParseError):
            parse_int_list("2•x", "•", 2, "red fouls/techs committed", side="red")


class TestParseBool:

    @pytest.mark.parametrize("text", ["Yes", "TRUE", "1", "✔"])
    def test_true(self, text):
        assert parse_bool(text, "blue badge") is True

    @pytest.mark.parametrize("text", ["No", "false", "0", ""])
    def test_false(self, text):
        assert parse_bool(text, "blue badge") is False

    def test_rejects_other_text(self):
        with pytest.raises(ValueParseError) as exc_info:
            parse_bool("maybe", "red badge", side="red")
        assert "bool" in exc_info.value.message
