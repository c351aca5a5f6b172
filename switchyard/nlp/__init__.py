"""Text processing capabilities used by routing.

Key Components:
    Tokenizer: Protocol for splitting text into tokens.
    RuleBasedTokenizer: Word/number/punctuation tokenizer (default).
    WhitespaceTokenizer: Splits on whitespace only.
"""

from switchyard.nlp.tokenizer import (
    Tokenizer,
    RuleBasedTokenizer,
    WhitespaceTokenizer,
)

__all__ = [
    "Tokenizer",
    "RuleBasedTokenizer",
    "WhitespaceTokenizer",
]
