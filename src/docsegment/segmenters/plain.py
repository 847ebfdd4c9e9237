"""Sentence segmentation of a plain-text character stream."""

from typing import List, Optional, Set, TextIO

from ..config.schema import PreprocessorConfig
from ..core.abc import Logger, Meter, TokenSource
from ..core.errors import ExhaustedError, InvalidArgument, StreamReadError
from ..core.types import SENTENCE_FINAL_FOLLOWERS, WHITESPACE_NEWLINE, Token
from ..tokenizers import WhitespaceTokenizer, resolve_tokenizer_factory


def split_tag(word: str, delimiter: str) -> List[str]:
    """
    Split ``word`` on the last occurrence of the literal ``delimiter``.

    Returns:
        List[str]: [word, tag] when the split gives two parts, else [word]
    """
    head, sep, tail = word.strip().rpartition(delimiter)
    if sep and tail:
        return [head, tail]
    return [word]


def release_stream(stream: Optional[TextIO]):
    """Close a stream, ignoring errors raised while closing."""
    if stream is None:
        return
    try:
        stream.close()
    except Exception:
        pass


class PlainTextSegmenter:
    """
    Groups the tokens of a character stream into sentences.

    A sentence ends at a delimiter word, together with any following
    closing punctuation (followers). The first token after that run is
    held back as the start of the next sentence. The stream is closed once
    the segmenter finds no further sentences; a consumer that stops early
    must close it itself. Single pass, single consumer.
    """

    def __init__(self, stream: TextIO, config: Optional[PreprocessorConfig] = None, *,
                 logger: Optional[Logger] = None, meter: Optional[Meter] = None):
        """
        Initialize segmenter over a stream it takes ownership of.

        Args:
            stream: Character stream to read; closed when exhausted
            config: Segmentation options (defaults apply if None)
            logger: Optional structured logger
            meter: Optional metrics collector

        Raises:
            InvalidArgument: If stream is None or the tokenizer options are invalid
        """
        if stream is None:
            raise InvalidArgument("Cannot read from null object!")
        self.config = config or PreprocessorConfig()
        self.log = logger
        self.meter = meter
        self._stream: Optional[TextIO] = stream

        # Establish how to find sentence boundaries
        eol_is_significant = False
        self.delimiters: Set[str] = set()
        if self.config.explicit_delimiter is None:
            self.delimiters.update(self.config.sentence_delimiters)
            self.followers: Set[str] = set(SENTENCE_FINAL_FOLLOWERS)
        else:
            self.delimiters.add(self.config.explicit_delimiter)
            self.followers = set()
            eol_is_significant = self.config.explicit_delimiter.isspace()

        factory = resolve_tokenizer_factory(self.config)
        if factory is None:
            eol_is_significant = WHITESPACE_NEWLINE in self.delimiters
            self.tokenizer: TokenSource = WhitespaceTokenizer(stream, eol_is_significant)
        elif eol_is_significant:
            self.tokenizer = factory.get_tokenizer(stream, "tokenizeNLs")
        else:
            self.tokenizer = factory.get_tokenizer(stream)

        if eol_is_significant:
            self.delimiters.add(self.tokenizer.newline_marker)

        self._next_sentence: Optional[List[Token]] = None
        self._carryover: Optional[Token] = None
        self._done = False

    def _release(self):
        if self._stream is None:
            return
        release_stream(self._stream)
        self._stream = None
        if self.log:
            self.log.info("stream_released")

    def _is_content(self, token: Token) -> bool:
        return not (token.word.isspace() or token.is_newline
                    or token.word == self.tokenizer.newline_marker)

    def _fetch(self) -> Token:
        token = next(self.tokenizer)
        if self.config.tag_delimiter is not None:
            parts = split_tag(token.word, self.config.tag_delimiter)
            token.word = parts[0]
            if len(parts) == 2:
                token.tag = parts[1]
        return token

    def _build_sentence(self) -> Optional[List[Token]]:
        sentence: List[Token] = []
        if self._carryover is not None:
            sentence.append(self._carryover)
            self._carryover = None
        seen_boundary = False

        if not sentence and not self.tokenizer.has_next():
            return None

        while self.tokenizer.has_next():
            token = self._fetch()

            if token.word in self.delimiters:
                seen_boundary = True
            elif seen_boundary and token.word not in self.followers:
                self._carryover = token
                break

            if self._is_content(token):
                sentence.append(token)

            # Without followers nothing can extend a finished sentence, so stop.
            # An empty one means the delimiter was whitespace such as a newline.
            if seen_boundary and not self.followers:
                if sentence or self.config.keep_empty_sentences:
                    break
                seen_boundary = False

        if not sentence and self._carryover is None and not self.config.keep_empty_sentences:
            return None
        return sentence

    def _prime(self):
        if self._next_sentence is not None or self._done:
            return
        try:
            sentence = self._build_sentence()
        except StreamReadError as e:
            if self.log:
                self.log.error("Read failed", error=str(e))
            self._done = True
            self._release()
            raise

        if sentence is None:
            self._done = True
            self._release()
            return

        if self.config.escaper is not None:
            sentence = self.config.escaper(sentence)
        if self.meter:
            self.meter.inc("docsegment.sentences")
            self.meter.observe("docsegment.sentence_length", len(sentence))
        self._next_sentence = sentence

    def has_next(self) -> bool:
        self._prime()
        return self._next_sentence is not None

    def __next__(self) -> List[Token]:
        self._prime()
        if self._next_sentence is None:
            raise ExhaustedError()
        sentence = self._next_sentence
        self._next_sentence = None
        return sentence

    def __iter__(self):
        return self
