"""Selector tokenizer: splits selector text into word and mark tokens.

Every mark character (punctuation, quote, slash, bracket, whitespace) is a
token of its own; everything between marks is a single word token:

    'div[class="ad"]' -> div, [, class, =, ", ad, ", ]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from extcss.selector.constants import SPACE, SUPPORTED_SELECTOR_MARKS

__all__ = ["Token", "TokenKind", "iter_tokens", "tokenize", "tokenize_attribute"]


class TokenKind(Enum):
    """Kind of a selector token."""

    WORD = "word"
    MARK = "mark"


@dataclass(frozen=True)
class Token:
    """A single token with its offset in the tokenized text."""

    kind: TokenKind
    value: str
    position: int

    @property
    def is_word(self) -> bool:
        return self.kind is TokenKind.WORD

    @property
    def is_mark(self) -> bool:
        return self.kind is TokenKind.MARK


def iter_tokens(text: str) -> Iterator[Token]:
    """Lazily yield tokens of *text*; each call starts a fresh pass."""
    word_start = -1
    for index, char in enumerate(text):
        if char in SUPPORTED_SELECTOR_MARKS:
            if word_start != -1:
                yield Token(TokenKind.WORD, text[word_start:index], word_start)
                word_start = -1
            yield Token(TokenKind.MARK, char, index)
        elif word_start == -1:
            word_start = index
    if word_start != -1:
        yield Token(TokenKind.WORD, text[word_start:], word_start)


def tokenize(text: str) -> list[Token]:
    """Split *text* into word and mark tokens.

    Backslashes stay ordinary mark tokens; escapes are interpreted by the
    validators that care about them.
    """
    return list(iter_tokens(text))


def tokenize_attribute(body: str) -> list[Token]:
    """Tokenize an attribute body (text between ``[`` and ``]``) without its spaces.

    Spaces are irrelevant to attribute validity, so ``'style *= "A" i'`` and
    ``'style*="A"i'`` produce the same tokens.
    """
    return tokenize(body.replace(SPACE, ""))
