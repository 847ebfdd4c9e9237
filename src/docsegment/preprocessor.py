"""Produces tokenized sentences from a plain text or XML document."""

import gzip
import io
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, TextIO, Union

from .config.schema import PreprocessorConfig
from .core.abc import Logger, Meter
from .core.errors import InvalidArgument, StreamReadError
from .core.types import DocType, Token
from .segmenters import PlainTextSegmenter, RegionCoordinator
from .segmenters.plain import release_stream

STRATEGIES: Dict[DocType, Callable[..., Iterator[List[Token]]]] = {}


def register_strategy(doc_type: DocType):
    """
    Register the sentence-sequence class used for a document type.

    The class is called as ``cls(stream, config, logger=..., meter=...)``.
    """
    def decorator(cls):
        STRATEGIES[doc_type] = cls
        return cls
    return decorator


register_strategy(DocType.PLAIN)(PlainTextSegmenter)
register_strategy(DocType.XML)(RegionCoordinator)


def open_document(path: Union[str, Path], encoding: str = "utf-8") -> TextIO:
    """
    Open a document for reading; ``.gz`` files are decompressed.

    Raises:
        InvalidArgument: If path is None
        StreamReadError: If the file cannot be opened
    """
    if path is None:
        raise InvalidArgument("Cannot open null document path!")
    path = Path(path)
    try:
        if path.suffix == ".gz":
            return gzip.open(path, "rt", encoding=encoding)
        return open(path, "r", encoding=encoding)
    except (OSError, LookupError) as e:
        raise StreamReadError(f"Could not open path {path}: {e}") from e


class DocumentPreprocessor:
    """
    Iterable of sentences read from one document.

    The document can be iterated once. Sentences are produced lazily and
    the document stream is closed when the last one has been read; use the
    preprocessor as a context manager to close it when stopping early.
    """

    def __init__(self, source: Union[TextIO, str, Path], doc_type: DocType = DocType.PLAIN, *,
                 config: Optional[PreprocessorConfig] = None, encoding: str = "utf-8",
                 logger: Optional[Logger] = None, meter: Optional[Meter] = None):
        """
        Initialize preprocessor.

        Args:
            source: Open text stream, or path of the document to open
            doc_type: Plain text or XML
            config: Segmentation options (defaults apply if None)
            encoding: Encoding used when source is a path
            logger: Optional structured logger
            meter: Optional metrics collector

        Raises:
            InvalidArgument: If source is None or doc_type has no strategy
            StreamReadError: If the document path cannot be opened
        """
        if source is None:
            raise InvalidArgument("Cannot read from null object!")
        doc_type = DocType(doc_type)
        if doc_type not in STRATEGIES:
            raise InvalidArgument(f"No sentence strategy registered for document type '{doc_type.value}'")

        if isinstance(source, (str, Path)):
            self.stream = open_document(source, encoding)
        else:
            self.stream = source
        self.doc_type = doc_type
        self.config = config or PreprocessorConfig()
        self.log = logger
        self.meter = meter
        self._started = False

    @classmethod
    def from_text(cls, text: str, doc_type: DocType = DocType.PLAIN, **kwargs) -> "DocumentPreprocessor":
        """Create a preprocessor over an in-memory string."""
        return cls(io.StringIO(text), doc_type, **kwargs)

    def configure(self, **updates) -> "DocumentPreprocessor":
        """
        Replace configuration options before iteration starts.

        Raises:
            RuntimeError: If iteration has already started
        """
        if self._started:
            raise RuntimeError("Cannot change options once iteration has started")
        data = dict(self.config)
        data.update(updates)
        self.config = PreprocessorConfig(**data)
        return self

    def __iter__(self) -> Iterator[List[Token]]:
        if self._started:
            raise RuntimeError("Document has already been iterated; it can only be read once")
        self._started = True
        strategy = STRATEGIES[self.doc_type]
        if self.log:
            self.log.info("document_opened", doc_type=self.doc_type.value)
        return strategy(self.stream, self.config, logger=self.log, meter=self.meter)

    def close(self):
        """Close the document stream unless it is already closed."""
        if not getattr(self.stream, "closed", False):
            release_stream(self.stream)

    def __enter__(self) -> "DocumentPreprocessor":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
