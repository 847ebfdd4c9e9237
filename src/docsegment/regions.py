"""Approximate XML reader returning the text of matching elements."""

import re
from typing import List, Optional, TextIO, Tuple

from .core.errors import ExhaustedError, InvalidArgument, StreamReadError

_TAG_RE = re.compile(r"^<\s*(/)?\s*([^\s/>!?]+)[^>]*?(/)?\s*>$", re.DOTALL)

CHUNK_SIZE = 8192


def parse_tag(text: str) -> Tuple[Optional[str], bool, bool]:
    """
    Parse a tag such as ``<s id="1">``, ``</s>`` or ``<br/>``.

    Returns:
        tuple: (element_name_or_none, is_end_tag, is_self_closing); the name is
        None for comments, declarations and processing instructions
    """
    match = _TAG_RE.match(text)
    if not match:
        return None, False, False
    closing, name, self_closing = match.groups()
    return name, bool(closing), bool(self_closing)


class XMLRegionSource:
    """
    Returns, in document order, the raw text inside every element whose
    name fully matches ``element_pattern``.

    Element names matching the pattern that nest inside an open region are
    depth-counted so the region ends at its own end tag. This is an
    approximation of XML: no well-formedness checking, entities are left
    as written, and a region still open at end of input returns what was read.
    """

    def __init__(self, stream: TextIO, element_pattern: str = ".*",
                 keep_internal_tags: bool = False):
        if stream is None:
            raise InvalidArgument("Cannot read from null object!")
        try:
            self._pattern = re.compile(element_pattern)
        except re.error as e:
            raise InvalidArgument(f"Invalid element pattern '{element_pattern}': {e}")
        self.keep_internal_tags = keep_internal_tags
        self._stream = stream
        self._buf = ""
        self._pos = 0
        self._eof = False
        self._next_block: Optional[str] = None
        self._done = False

    def _matches(self, name: Optional[str]) -> bool:
        return name is not None and self._pattern.fullmatch(name) is not None

    def _refill(self) -> bool:
        """Read another chunk into the buffer. Returns False at end of input."""
        if self._eof:
            return False
        try:
            chunk = self._stream.read(CHUNK_SIZE)
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f"Could not read from input: {e}") from e
        if not chunk:
            self._eof = True
            return False
        self._buf = self._buf[self._pos:] + chunk
        self._pos = 0
        return True

    def _read_until(self, char: str, inclusive: bool) -> Tuple[str, bool]:
        """Read up to ``char``. Returns (text, found)."""
        parts: List[str] = []
        while True:
            idx = self._buf.find(char, self._pos)
            if idx >= 0:
                end = idx + 1 if inclusive else idx
                parts.append(self._buf[self._pos:end])
                self._pos = end
                return "".join(parts), True
            parts.append(self._buf[self._pos:])
            self._pos = len(self._buf)
            if not self._refill():
                return "".join(parts), False

    def _read_item(self) -> Optional[Tuple[bool, str]]:
        """Return the next (is_tag, text) item, or None at end of input."""
        if self._pos >= len(self._buf) and not self._refill():
            return None
        if self._buf[self._pos] == "<":
            text, found = self._read_until(">", inclusive=True)
            return found, text
        text, _ = self._read_until("<", inclusive=False)
        return False, text

    def _find_next(self) -> Optional[str]:
        while True:
            item = self._read_item()
            if item is None:
                return None
            is_tag, text = item
            if not is_tag:
                continue
            name, closing, self_closing = parse_tag(text)
            if closing or not self._matches(name):
                continue
            if self_closing:
                return ""
            return self._read_region()

    def _read_region(self) -> str:
        parts: List[str] = []
        depth = 1
        while True:
            item = self._read_item()
            if item is None:
                return "".join(parts)
            is_tag, text = item
            if not is_tag:
                parts.append(text)
                continue
            name, closing, self_closing = parse_tag(text)
            if self._matches(name) and not self_closing:
                depth += -1 if closing else 1
                if depth == 0:
                    return "".join(parts)
            if self.keep_internal_tags:
                parts.append(text)

    def has_next(self) -> bool:
        if self._next_block is None and not self._done:
            self._next_block = self._find_next()
            if self._next_block is None:
                self._done = True
        return self._next_block is not None

    def __next__(self) -> str:
        if not self.has_next():
            raise ExhaustedError()
        block = self._next_block
        self._next_block = None
        return block

    def __iter__(self):
        return self
