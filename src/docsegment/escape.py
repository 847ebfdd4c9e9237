"""PTB-style escaping of brackets and quotes."""

from dataclasses import replace
from typing import Callable, Dict, List

from .core.types import Token

BRACKET_ESCAPES = {
    "(": "-LRB-",
    ")": "-RRB-",
    "[": "-LSB-",
    "]": "-RSB-",
    "{": "-LCB-",
    "}": "-RCB-",
}

OPEN_QUOTE = "``"
CLOSE_QUOTE = "''"


def escape_word(word: str) -> str:
    """Escape a bracket token; other words are returned unchanged."""
    return BRACKET_ESCAPES.get(word, word)


def ptb_escape(sentence: List[Token]) -> List[Token]:
    """
    Escape a finished sentence the way the Penn Treebank does.

    Brackets become -LRB-/-RRB- etc. and straight double quotes alternate
    between opening and closing quotes, starting with an opening one.

    Args:
        sentence: Tokens of one sentence

    Returns:
        List[Token]: New tokens; the input tokens are not modified
    """
    escaped = []
    quote_open = False
    for token in sentence:
        word = token.word
        if word == "\"":
            word = CLOSE_QUOTE if quote_open else OPEN_QUOTE
            quote_open = not quote_open
        else:
            word = escape_word(word)
        if word == token.word:
            escaped.append(replace(token))
        else:
            original = token.original_text if token.original_text is not None else token.word
            escaped.append(replace(token, word=word, original_text=original))
    return escaped


ESCAPERS: Dict[str, Callable[[List[Token]], List[Token]]] = {
    "ptb": ptb_escape,
}
