"""Tokenizer for text that is already tokenized: split on whitespace."""

from collections import deque
from typing import TextIO

from ..core.errors import ExhaustedError, InvalidArgument, StreamReadError
from ..core.types import WHITESPACE_NEWLINE, Token
from .options import merge_options, option_flag, parse_options


class WhitespaceTokenizer:
    """
    Splits each line of the stream on whitespace.

    When ``eol_is_significant`` is set, every line break is returned as a
    newline-marker token so that it can act as a sentence delimiter.
    """

    newline_marker = WHITESPACE_NEWLINE

    def __init__(self, stream: TextIO, eol_is_significant: bool = False):
        if stream is None:
            raise InvalidArgument("Cannot read from null object!")
        self._stream = stream
        self.eol_is_significant = eol_is_significant
        self._pending = deque()
        self._eof = False

    def _read_line(self) -> str:
        try:
            return self._stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f"Could not read from input: {e}") from e

    def _fill(self):
        while not self._pending and not self._eof:
            line = self._read_line()
            if not line:
                self._eof = True
                break
            for word in line.split():
                self._pending.append(Token(word, original_text=word))
            if self.eol_is_significant and line.endswith("\n"):
                self._pending.append(Token(WHITESPACE_NEWLINE, is_newline=True,
                                           original_text=WHITESPACE_NEWLINE))

    def has_next(self) -> bool:
        self._fill()
        return bool(self._pending)

    def __next__(self) -> Token:
        if not self.has_next():
            raise ExhaustedError()
        return self._pending.popleft()

    def __iter__(self):
        return self


class WhitespaceTokenizerFactory:
    """Factory for WhitespaceTokenizer. Understands the ``tokenizeNLs`` option."""

    KNOWN_OPTIONS = ("tokenizeNLs",)

    def __init__(self, options: str = ""):
        parse_options(options, self.KNOWN_OPTIONS)
        self.options = options

    def get_tokenizer(self, stream: TextIO, options: str = "") -> WhitespaceTokenizer:
        parsed = parse_options(merge_options(self.options, options), self.KNOWN_OPTIONS)
        return WhitespaceTokenizer(stream, option_flag(parsed, "tokenizeNLs", False))
