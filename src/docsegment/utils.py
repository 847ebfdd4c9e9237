"""Small utility helpers."""

import sys
from typing import List

from .core.types import Token


class ConsoleLogger:
    """Simple logger writing key=value lines to stderr."""

    def __init__(self, stream=None):
        self.stream = stream

    def _write(self, level: str, msg: str, kv):
        details = " ".join(f"{k}={v}" for k, v in kv.items())
        line = f"{level}: {msg} {details}" if details else f"{level}: {msg}"
        print(line, file=self.stream or sys.stderr)

    def info(self, msg: str, **kv):
        self._write("INFO", msg, kv)

    def warn(self, msg: str, **kv):
        self._write("WARN", msg, kv)

    def error(self, msg: str, **kv):
        self._write("ERROR", msg, kv)


def sentence_text(sentence: List[Token], original_text: bool = False) -> str:
    """
    Render a sentence as a line of text.

    Args:
        sentence: Tokens to render
        original_text: Reproduce the original characters and whitespace
            instead of joining the (escaped) words with single spaces
    """
    if not original_text:
        return " ".join(token.word for token in sentence)

    parts = []
    for i, token in enumerate(sentence):
        if i == 0:
            parts.append(token.before)
        parts.append(token.original_text if token.original_text is not None else token.word)
        parts.append(token.after)
    return "".join(parts)
