"""Tokenizers used by keyword routing.

A tokenizer splits text into an ordered sequence of tokens. Keyword nodes
compare their keyword against these tokens, so two tokenizers are offered:

    RuleBasedTokenizer: Splits on whitespace and separates punctuation, so
        "weather?" yields "weather" and "?".
    WhitespaceTokenizer: Splits on runs of whitespace only.

Example:
    >>> RuleBasedTokenizer().tokenize("What's the weather, today?")
    ["what's", 'the', 'weather', ',', 'today', '?']
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class Tokenizer(Protocol):
    """Capability that splits text into ordered tokens."""

    def tokenize(self, text: str) -> list[str]:
        ...


class RuleBasedTokenizer:
    """Rule-based tokenizer for English text.

    Rules, applied in order:
        - Words keep inner apostrophes and hyphens ("don't", "e-mail").
        - Numbers keep inner decimal points and commas ("3.14", "1,000").
        - Words may start with digits ("2fa", "4th").
        - Every other non-space character is a token of its own.

    Text is not case-folded here; callers normalize case before tokenizing.
    """

    _TOKEN_PATTERN = re.compile(
        r"\d+(?:[.,]\d+)*(?!\w)"     # numbers not followed by letters
        r"|\w+(?:['’-]\w+)*"   # words with inner apostrophes or hyphens
        r"|[^\w\s]",                # single punctuation or symbol
        re.UNICODE,
    )

    def tokenize(self, text: str) -> list[str]:
        if not text:
            return []
        return self._TOKEN_PATTERN.findall(text)


class WhitespaceTokenizer:
    """Splits text on runs of whitespace."""

    def tokenize(self, text: str) -> list[str]:
        return text.split()


__all__ = [
    "Tokenizer",
    "RuleBasedTokenizer",
    "WhitespaceTokenizer",
]
