"""Tests for selector parser predicates and validators."""

import pytest

from extcss.errors import PolicyViolation, SelectorSyntaxError
from extcss.selector.predicates import (
    check_allowed_inside_has,
    check_has_placement,
    does_regular_continue_after_space,
    is_absolute_pseudo_class,
    is_attribute_closing,
    is_attribute_opening,
    is_regexp_closing,
    is_regexp_opening,
    is_relative_pseudo_class,
    is_supported_pseudo_class,
    is_white_space_char,
)
from extcss.selector.tokenizer import Token, TokenKind


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class TestPseudoClassTables:
    @pytest.mark.parametrize("name", ["has", "-abp-has", "if-not", "is", "not", "where"])
    def test_relative(self, name: str) -> None:
        assert is_relative_pseudo_class(name)
        assert not is_absolute_pseudo_class(name)
        assert is_supported_pseudo_class(name)

    @pytest.mark.parametrize(
        "name",
        [
            "contains",
            "has-text",
            "-abp-contains",
            "matches-css",
            "matches-css-before",
            "matches-css-after",
            "matches-attr",
            "matches-property",
            "xpath",
            "nth-ancestor",
            "upward",
            "remove",
        ],
    )
    def test_absolute(self, name: str) -> None:
        assert is_absolute_pseudo_class(name)
        assert not is_relative_pseudo_class(name)
        assert is_supported_pseudo_class(name)

    @pytest.mark.parametrize("name", ["hover", "nth-child", "lang", "invalid-pseudo"])
    def test_standard_names_are_not_extended(self, name: str) -> None:
        assert not is_supported_pseudo_class(name)

    def test_case_insensitive(self) -> None:
        assert is_relative_pseudo_class("HAS")
        assert is_absolute_pseudo_class("Contains")


class TestWhiteSpace:
    @pytest.mark.parametrize("value", [" ", "\t", "\n", "\r", "\f"])
    def test_white_space(self, value: str) -> None:
        assert is_white_space_char(value)

    @pytest.mark.parametrize("value", [None, "", "a", ">"])
    def test_not_white_space(self, value: str | None) -> None:
        assert not is_white_space_char(value)


# ---------------------------------------------------------------------------
# Space continuation
# ---------------------------------------------------------------------------


class TestRegularContinuesAfterSpace:
    @pytest.mark.parametrize(
        "token",
        [
            Token(TokenKind.WORD, "span", 0),
            Token(TokenKind.MARK, ">", 0),
            Token(TokenKind.MARK, "+", 0),
            Token(TokenKind.MARK, "~", 0),
            Token(TokenKind.MARK, "*", 0),
            Token(TokenKind.MARK, "#", 0),
            Token(TokenKind.MARK, ".", 0),
            Token(TokenKind.MARK, ":", 0),
            Token(TokenKind.MARK, "[", 0),
            Token(TokenKind.MARK, "'", 0),
        ],
    )
    def test_continues(self, token: Token) -> None:
        assert does_regular_continue_after_space(token)

    @pytest.mark.parametrize(
        "token",
        [None, Token(TokenKind.MARK, ",", 0), Token(TokenKind.MARK, ")", 0), Token(TokenKind.MARK, " ", 0)],
    )
    def test_does_not_continue(self, token: Token | None) -> None:
        assert not does_regular_continue_after_space(token)


# ---------------------------------------------------------------------------
# Regexp boundaries
# ---------------------------------------------------------------------------


class TestRegexpOpening:
    def test_requires_open_pseudo_class(self) -> None:
        with pytest.raises(SelectorSyntaxError, match="only in arg of extended pseudo-class"):
            is_regexp_opening([], "")

    def test_xpath_never_opens(self) -> None:
        assert not is_regexp_opening(["xpath"], "")
        assert not is_regexp_opening(["xpath"], "/")

    @pytest.mark.parametrize("arg", ["", "'", '"'])
    def test_contains_at_start(self, arg: str) -> None:
        assert is_regexp_opening(["contains"], arg)
        assert is_regexp_opening(["has-text"], arg)

    def test_contains_inside_text(self) -> None:
        assert not is_regexp_opening(["contains"], "a")
        assert not is_regexp_opening(["-abp-contains"], "1 ")

    @pytest.mark.parametrize("arg", ["", '"', "'", "check=", "inner.", "height:", "content: "])
    def test_other_names_after_allowed_marks(self, arg: str) -> None:
        assert is_regexp_opening(["matches-attr"], arg)

    def test_other_names_inside_word(self) -> None:
        assert not is_regexp_opening(["matches-css"], "url")

    def test_slash_right_after_pattern(self) -> None:
        with pytest.raises(SelectorSyntaxError, match=r"Invalid regexp pattern for :matches-attr\(\)"):
            is_regexp_opening(["matches-attr"], "/a/")

    def test_top_of_stack_decides(self) -> None:
        assert not is_regexp_opening(["contains", "xpath"], "")


class TestRegexpClosing:
    def test_unescaped(self) -> None:
        assert is_regexp_closing("/ad")

    def test_escaped(self) -> None:
        assert not is_regexp_closing("/image\\")


# ---------------------------------------------------------------------------
# Attribute brackets
# ---------------------------------------------------------------------------


class TestAttributeOpening:
    def test_opening(self) -> None:
        assert is_attribute_opening("[", "div")
        assert is_attribute_opening("[", None)

    def test_escaped(self) -> None:
        assert not is_attribute_opening("[", "\\")

    def test_other_marks(self) -> None:
        assert not is_attribute_opening("(", "div")


class TestAttributeClosing:
    @pytest.mark.parametrize(
        "body",
        [
            "style",
            "style*=margin",
            'style*="margin"',
            'style*="MARGIN" i',
            "style*=MARGIN i",
            "class='page' I",
            'data-comma="0,1"',
            'onclick*="redirect"',
            "\\:data-service-slot",
            'class\\"ads-article\\"',
        ],
    )
    def test_complete(self, body: str) -> None:
        assert is_attribute_closing(body)

    @pytest.mark.parametrize("body", ['title="a', "title='a]b", 'title="a" b'])
    def test_bracket_inside_value(self, body: str) -> None:
        assert not is_attribute_closing(body)

    def test_mark_at_start(self) -> None:
        with pytest.raises(SelectorSyntaxError, match="""due to '=' at start of it"""):
            is_attribute_closing('="margin"')

    def test_trailing_equal_sign(self) -> None:
        with pytest.raises(SelectorSyntaxError, match=r"'\[style=\]' is not a valid attribute due to '='"):
            is_attribute_closing("style=")

    def test_unquoted_value_ending_with_quote(self) -> None:
        with pytest.raises(SelectorSyntaxError, match="is not a valid attribute") as excinfo:
            is_attribute_closing('style*=border: 0px"')
        assert excinfo.value.fragment == 'style*=border: 0px"'


# ---------------------------------------------------------------------------
# Nesting restrictions
# ---------------------------------------------------------------------------


class TestAllowedInsideHas:
    @pytest.mark.parametrize("name", ["has", "-abp-has", "is", "where"])
    def test_forbidden(self, name: str) -> None:
        with pytest.raises(PolicyViolation, match=f"Usage of :{name} pseudo-class is not allowed inside upper :has"):
            check_allowed_inside_has(name, ["has"])

    def test_forbidden_deep_inside(self) -> None:
        with pytest.raises(PolicyViolation):
            check_allowed_inside_has("is", ["-abp-has", "not"])

    @pytest.mark.parametrize("name", ["not", "if-not", "contains", "upward"])
    def test_allowed(self, name: str) -> None:
        check_allowed_inside_has(name, ["has"])

    def test_outside_has(self) -> None:
        check_allowed_inside_has("has", ["not", "is"])


class TestHasPlacement:
    def test_inside_regular_pseudo(self) -> None:
        with pytest.raises(PolicyViolation, match="not allowed inside regular pseudo"):
            check_has_placement("has", True, False)

    def test_after_pseudo_element(self) -> None:
        with pytest.raises(PolicyViolation, match="not allowed after any regular pseudo-element"):
            check_has_placement("-abp-has", False, True)

    def test_other_names_unrestricted(self) -> None:
        check_has_placement("not", True, True)

    def test_plain_placement(self) -> None:
        check_has_placement("has", False, False)
