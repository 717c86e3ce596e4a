"""Tests for the error hierarchy."""

from dotnorm.errors import DotError, DotSyntaxError, RawAstError


class TestDotError:
    def test_basic(self):
        err = DotError("something broke")
        assert str(err) == "something broke"
        assert isinstance(err, Exception)

    def test_raw_ast_error_is_dot_error(self):
        assert isinstance(RawAstError("bad tree"), DotError)


class TestDotSyntaxError:
    def test_message_includes_location(self):
        err = DotSyntaxError("Expected RBRACE", position=4, line=1, column=5)
        assert str(err) == "Expected RBRACE at line 1, column 5"
        assert err.reason == "Expected RBRACE"
        assert err.position == 4

    def test_at_computes_line_and_column(self):
        err = DotSyntaxError.at("ab\ncd\nef", 7, "boom")
        assert (err.line, err.column) == (3, 2)

    def test_at_first_character(self):
        err = DotSyntaxError.at("xyz", 0, "boom")
        assert (err.line, err.column) == (1, 1)

    def test_inheritance(self):
        err = DotSyntaxError.at("", 0, "empty")
        assert isinstance(err, DotError)
        assert isinstance(err, Exception)
