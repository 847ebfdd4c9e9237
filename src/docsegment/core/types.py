"""Data types and shared constants for docsegment."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

DEFAULT_SENTENCE_DELIMS = (".", "?", "!")

# From PTB conventions, plus curly closing quotes
SENTENCE_FINAL_FOLLOWERS = (")", "]", "\"", "'", "''", "-RRB-", "-RSB-", "-RCB-", "”", "’")

NEWLINE_TOKEN = "*NL*"       # newline marker of the default tokenizer
WHITESPACE_NEWLINE = "\n"    # newline marker of the whitespace tokenizer


class DocType(str, Enum):
    """Kind of document being segmented."""
    PLAIN = "plain"
    XML = "xml"


class TokenizerSelection(str, Enum):
    """Which built-in tokenizer feeds the segmenter."""
    DEFAULT = "default"          # PTB-style regex tokenizer
    WHITESPACE = "whitespace"    # whitespace tokenizer via its factory
    NONE = "none"                # input already tokenized, split on whitespace


@dataclass
class Token:
    """A single word or punctuation unit."""
    word: str                            # surface text
    tag: Optional[str] = None            # part-of-speech tag, set by tag splitting
    is_newline: bool = False             # newline marker emitted by the tokenizer
    original_text: Optional[str] = None  # raw text before escaping
    before: str = ""                     # whitespace preceding the token
    after: str = ""                      # whitespace following the token

    def __str__(self) -> str:
        return self.word


Sentence = List[Token]
