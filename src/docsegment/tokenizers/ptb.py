"""Default regex tokenizer following Penn Treebank conventions."""

import re
from collections import deque
from typing import List, Optional, TextIO, Tuple

from ..core.errors import ExhaustedError, InvalidArgument, StreamReadError
from ..core.types import NEWLINE_TOKEN, Token
from ..escape import CLOSE_QUOTE, OPEN_QUOTE, escape_word
from .options import merge_options, option_flag, parse_options

_TOKEN_RE = re.compile(r"""
      \.\.\.                                           # ellipsis
    | (?:[A-Za-z]\.){2,}                               # acronyms: U.S., e.g.
    | (?:Mrs|Mr|Ms|Dr|Prof|Sr|Jr|St|vs|etc|Inc|Ltd|Corp|Co)\.(?=\s+\S)
    | \d+(?:[.,:]\d+)*                                 # numbers: 3.14, 1,000, 10:30
    | \w+(?:[-'’]\w+)*                                 # words, hyphenated words
    | ''|``|--
    | [^\w\s]                                          # any other single symbol
""", re.VERBOSE)

_CLITIC_RE = re.compile(r"^(\w+)(n't|'s|'re|'ll|'ve|'m|'d)$", re.IGNORECASE)

_OPENERS = "([{"


class DefaultTokenizer:
    """
    PTB-style tokenizer reading the stream lazily, one line at a time.

    Options (comma-separated): ``tokenizeNLs`` returns each newline as a
    ``*NL*`` token, ``ptb3Escaping`` (default true) escapes brackets and
    double quotes, ``invertible`` records the original text and the
    surrounding whitespace on every token.
    """

    KNOWN_OPTIONS = ("tokenizeNLs", "ptb3Escaping", "invertible")
    newline_marker = NEWLINE_TOKEN

    def __init__(self, stream: TextIO, options: str = ""):
        if stream is None:
            raise InvalidArgument("Cannot read from null object!")
        parsed = parse_options(options, self.KNOWN_OPTIONS)
        self.tokenize_nls = option_flag(parsed, "tokenizeNLs", False)
        self.ptb3_escaping = option_flag(parsed, "ptb3Escaping", True)
        self.invertible = option_flag(parsed, "invertible", False)

        self._stream = stream
        self._queue = deque()
        self._last: Optional[Token] = None
        self._whitespace = ""
        self._eof = False

    def _read_line(self) -> str:
        try:
            return self._stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f"Could not read from input: {e}") from e

    def _fill(self):
        # A token leaves the queue only once its successor is known,
        # so that its trailing whitespace is complete.
        while len(self._queue) < 2 and not self._eof:
            line = self._read_line()
            if not line:
                self._eof = True
                if self.invertible and self._last is not None:
                    self._last.after = self._whitespace
                break
            self._lex(line)

    def _lex(self, line: str):
        pos = 0
        for match in _TOKEN_RE.finditer(line):
            self._add_gap(line[pos:match.start()])
            start = match.start()
            opening = start == 0 or line[start - 1].isspace() or line[start - 1] in _OPENERS
            for word, raw in self._split(match.group(), opening):
                self._emit(word, raw)
            pos = match.end()
        self._add_gap(line[pos:])

    def _add_gap(self, gap: str):
        if not self.tokenize_nls:
            self._whitespace += gap
            return
        for i, part in enumerate(gap.split("\n")):
            if i:
                self._emit(NEWLINE_TOKEN, "\n", is_newline=True)
            self._whitespace += part

    def _split(self, raw: str, opening: bool) -> List[Tuple[str, str]]:
        clitic = _CLITIC_RE.match(raw)
        if clitic:
            return [(part, part) for part in clitic.groups()]
        return [(self._escape(raw, opening), raw)]

    def _escape(self, raw: str, opening: bool) -> str:
        if not self.ptb3_escaping:
            return raw
        if raw == "\"":
            return OPEN_QUOTE if opening else CLOSE_QUOTE
        if raw == "“":
            return OPEN_QUOTE
        if raw == "”":
            return CLOSE_QUOTE
        return escape_word(raw)

    def _emit(self, word: str, raw: str, is_newline: bool = False):
        if self.invertible:
            token = Token(word, is_newline=is_newline, original_text=raw, before=self._whitespace)
            if self._last is not None:
                self._last.after = self._whitespace
        else:
            token = Token(word, is_newline=is_newline)
        self._whitespace = ""
        self._queue.append(token)
        self._last = token

    def has_next(self) -> bool:
        self._fill()
        return bool(self._queue)

    def __next__(self) -> Token:
        if not self.has_next():
            raise ExhaustedError()
        return self._queue.popleft()

    def __iter__(self):
        return self


class DefaultTokenizerFactory:
    """Factory for DefaultTokenizer with a fixed base option string."""

    def __init__(self, options: str = ""):
        parse_options(options, DefaultTokenizer.KNOWN_OPTIONS)
        self.options = options

    def get_tokenizer(self, stream: TextIO, options: str = "") -> DefaultTokenizer:
        return DefaultTokenizer(stream, merge_options(self.options, options))
