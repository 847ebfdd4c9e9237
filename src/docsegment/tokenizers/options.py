"""Parsing of comma-separated tokenizer option strings."""

from typing import Dict, Iterable

from ..core.errors import InvalidArgument

_TRUE_VALUES = ("true", "1", "yes", "on")


def parse_options(options: str, known: Iterable[str]) -> Dict[str, str]:
    """
    Parse "key[=value],key[=value]" into a dict. A bare key means "true".

    Raises:
        InvalidArgument: If an option key is not in ``known``
    """
    known = set(known)
    parsed: Dict[str, str] = {}
    for item in (options or "").split(","):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition("=")
        key = key.strip()
        if key not in known:
            raise InvalidArgument(f"Unknown tokenizer option '{key}', expected one of {sorted(known)}")
        parsed[key] = value.strip() if value else "true"
    return parsed


def option_flag(parsed: Dict[str, str], key: str, default: bool) -> bool:
    if key not in parsed:
        return default
    return parsed[key].lower() in _TRUE_VALUES


def merge_options(*options: str) -> str:
    """Join option strings, skipping empty ones."""
    return ",".join(o for o in options if o)
