"""
docsegment - Sentence segmentation for plain text and XML documents.

Turns a character stream into a lazy sequence of tokenized sentences.
Tokenizers, escapers, loggers and meters can all be injected by the host.
"""

from .core.errors import ExhaustedError, InvalidArgument, StreamReadError
from .core.types import DocType, Token, TokenizerSelection
from .config.schema import PreprocessorConfig
from .preprocessor import DocumentPreprocessor

__version__ = "0.1.0"

__all__ = [
    "DocumentPreprocessor",
    "PreprocessorConfig",
    "DocType",
    "Token",
    "TokenizerSelection",
    "ExhaustedError",
    "InvalidArgument",
    "StreamReadError",
]
