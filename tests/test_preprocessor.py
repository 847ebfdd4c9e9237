"""Test the document preprocessor entry point."""

import gzip
import io

import pytest

from docsegment import DocType, DocumentPreprocessor, PreprocessorConfig
from docsegment.core.errors import InvalidArgument, StreamReadError
from docsegment.core.types import TokenizerSelection
from docsegment.preprocessor import STRATEGIES, register_strategy
from docsegment.segmenters import PlainTextSegmenter, RegionCoordinator


def words(sentences):
    return [[token.word for token in sentence] for sentence in sentences]


class TestDocumentPreprocessor:
    """Test document opening, strategy dispatch and lifecycle."""

    def test_plain_text(self):
        """Plain documents are segmented directly."""
        doc = DocumentPreprocessor.from_text("It rains. We stay in!")
        assert words(doc) == [["It", "rains", "."], ["We", "stay", "in", "!"]]

    def test_xml_document(self):
        """XML documents are segmented region by region."""
        doc = DocumentPreprocessor.from_text(
            "<doc><s>A B.</s><s></s><s>C.</s></doc>", DocType.XML,
            config=PreprocessorConfig(element_filter="s"))
        assert words(doc) == [["A", "B", "."], ["C", "."]]

    def test_strategy_dispatch(self):
        """Each document type resolves to its registered strategy."""
        assert STRATEGIES[DocType.PLAIN] is PlainTextSegmenter
        assert STRATEGIES[DocType.XML] is RegionCoordinator
        assert isinstance(iter(DocumentPreprocessor.from_text("x", "xml")), RegionCoordinator)

    def test_register_strategy(self, monkeypatch):
        """New strategies can be registered for a document type."""
        monkeypatch.setitem(STRATEGIES, DocType.PLAIN, STRATEGIES[DocType.PLAIN])

        @register_strategy(DocType.PLAIN)
        class Reversed(PlainTextSegmenter):
            def __next__(self):
                return list(reversed(super().__next__()))

        doc = DocumentPreprocessor.from_text("a b .")
        assert words(doc) == [[".", "b", "a"]]

    def test_read_from_path(self, tmp_path):
        """A path is opened with the given encoding."""
        path = tmp_path / "doc.txt"
        path.write_text("Grüße aus Köln. Tschüss!", encoding="latin-1")
        doc = DocumentPreprocessor(str(path), encoding="latin-1")
        assert words(doc) == [["Grüße", "aus", "Köln", "."], ["Tschüss", "!"]]
        assert doc.stream.closed

    def test_read_gzip_path(self, tmp_path):
        """Gzip-compressed documents are decompressed."""
        path = tmp_path / "doc.txt.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write("One. Two.")
        assert words(DocumentPreprocessor(path)) == [["One", "."], ["Two", "."]]

    def test_missing_path(self, tmp_path):
        """A path that cannot be opened raises StreamReadError immediately."""
        with pytest.raises(StreamReadError, match="Could not open path"):
            DocumentPreprocessor(tmp_path / "missing.txt")

    def test_null_source(self):
        """A missing source is rejected immediately."""
        with pytest.raises(InvalidArgument):
            DocumentPreprocessor(None)

    def test_single_pass(self):
        """A document can only be iterated once."""
        doc = DocumentPreprocessor.from_text("a .")
        list(doc)
        with pytest.raises(RuntimeError, match="only be read once"):
            iter(doc)

    def test_configure_before_iteration(self):
        """Options can be replaced until iteration starts."""
        doc = DocumentPreprocessor.from_text("a_X b_Y").configure(
            tokenizer=TokenizerSelection.NONE, tag_delimiter="_")
        sentences = list(doc)
        assert [(t.word, t.tag) for t in sentences[0]] == [("a", "X"), ("b", "Y")]
        with pytest.raises(RuntimeError):
            doc.configure(keep_empty_sentences=True)

    def test_context_manager_closes_on_early_stop(self, tracking_stream):
        """Leaving the with-block closes a partly read document."""
        stream = tracking_stream("a . b . c .")
        with DocumentPreprocessor(stream) as doc:
            next(iter(doc))
        assert stream.close_count == 1

    def test_context_manager_after_exhaustion(self, tracking_stream):
        """A fully read document is not closed a second time."""
        stream = tracking_stream("a . b .")
        with DocumentPreprocessor(stream) as doc:
            assert len(list(doc)) == 2
        assert stream.close_count == 1

    def test_logging(self, test_logger):
        """Opening a document is logged with its type."""
        list(DocumentPreprocessor(io.StringIO("a ."), logger=test_logger))
        assert test_logger.messages[0] == ("info", "document_opened", {"doc_type": "plain"})
