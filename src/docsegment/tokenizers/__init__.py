"""
Tokenizers feeding the sentence segmenters.

Every tokenizer implements the TokenSource protocol; every factory
implements TokenizerFactory, so hosts can inject their own.
"""

from typing import Optional

from ..core.abc import TokenizerFactory
from ..core.types import TokenizerSelection
from .ptb import DefaultTokenizer, DefaultTokenizerFactory
from .whitespace import WhitespaceTokenizer, WhitespaceTokenizerFactory


def resolve_tokenizer_factory(config) -> Optional[TokenizerFactory]:
    """
    Pick the tokenizer factory for a configuration.

    Returns:
        The injected factory if any, else the built-in one for the selection;
        None when the input is already tokenized (TokenizerSelection.NONE)
    """
    if config.tokenizer_factory is not None:
        return config.tokenizer_factory
    if config.tokenizer == TokenizerSelection.DEFAULT:
        return DefaultTokenizerFactory(config.tokenizer_options)
    if config.tokenizer == TokenizerSelection.WHITESPACE:
        return WhitespaceTokenizerFactory(config.tokenizer_options)
    return None


__all__ = [
    'DefaultTokenizer', 'DefaultTokenizerFactory',
    'WhitespaceTokenizer', 'WhitespaceTokenizerFactory',
    'resolve_tokenizer_factory',
]
