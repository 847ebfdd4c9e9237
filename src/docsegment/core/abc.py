"""Protocol interfaces for dependency injection from the host application."""

from typing import Any, Iterator, List, Protocol, TextIO

from .types import Token


class TokenSource(Protocol):
    """Lazy, forward-only sequence of tokens read from a character stream."""

    newline_marker: str

    def has_next(self) -> bool:
        """Return True if another token can be read."""
        ...

    def __next__(self) -> Token:
        """Return the next token or raise ExhaustedError."""
        ...

    def __iter__(self) -> Iterator[Token]:
        ...


class TokenizerFactory(Protocol):
    """Builds token sources. Implement to plug in another tokenizer."""

    def get_tokenizer(self, stream: TextIO, options: str = "") -> TokenSource:
        """
        Create a tokenizer over a character stream.

        Args:
            stream: Text stream to tokenize
            options: Comma-separated tokenizer options (e.g. "tokenizeNLs")

        Returns:
            TokenSource: Tokenizer reading from the stream
        """
        ...


class RegionSource(Protocol):
    """Lazy sequence of raw text blocks taken from matching regions."""

    def has_next(self) -> bool:
        ...

    def __next__(self) -> str:
        ...


class Escaper(Protocol):
    """Transform applied to every finished sentence."""

    def __call__(self, sentence: List[Token]) -> List[Token]:
        ...


class Logger(Protocol):
    """Optional structured logging interface."""

    def info(self, msg: str, **kv: Any) -> None:
        """Log info level message with optional key-value context."""
        ...

    def warn(self, msg: str, **kv: Any) -> None:
        """Log warning level message with optional key-value context."""
        ...

    def error(self, msg: str, **kv: Any) -> None:
        """Log error level message with optional key-value context."""
        ...


class Meter(Protocol):
    """Optional metrics collection interface."""

    def inc(self, name: str, amount: int = 1, **tags: str) -> None:
        """Increment a counter metric with optional tags."""
        ...

    def observe(self, name: str, value: float, **tags: str) -> None:
        """Record an observation metric with optional tags."""
        ...
