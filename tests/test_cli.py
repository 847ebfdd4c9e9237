"""Test the command-line interface."""

import io
import sys

import pytest

from docsegment import preprocessor
from docsegment.cli import main
from docsegment.core.errors import InvalidArgument
from docsegment.core.types import DocType
from docsegment.preprocessor import STRATEGIES


@pytest.fixture
def opened_documents(monkeypatch):
    """Record every stream the preprocessor opens from a path."""
    opened = []
    real_open = preprocessor.open_document

    def recording_open(path, encoding="utf-8"):
        stream = real_open(path, encoding)
        opened.append(stream)
        return stream

    monkeypatch.setattr(preprocessor, "open_document", recording_open)
    return opened


@pytest.fixture
def text_file(tmp_path):
    def _write(text, name="doc.txt", encoding="utf-8"):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)
    return _write


class TestCli:
    """Test command-line processing."""

    def test_plain_file(self, text_file, capsys):
        """Sentences are printed one per line with a summary on stderr."""
        assert main([text_file("Hello world. Bye (now).")]) == 0
        out, err = capsys.readouterr()
        assert out.splitlines() == ["Hello world .", "Bye -LRB- now -RRB- ."]
        assert "Read in 2 sentences." in err

    def test_suppress_escaping(self, text_file, capsys):
        """--suppress-escaping keeps brackets as written."""
        main(["--suppress-escaping", text_file("Bye (now).")])
        assert capsys.readouterr().out.splitlines() == ["Bye ( now ) ."]

    def test_print_original_text(self, text_file, capsys):
        """--print-original-text reprints the text with its spacing."""
        main(["--print-original-text", text_file("Bye  (now).  Then more.")])
        assert capsys.readouterr().out.splitlines() == ["Bye  (now).  ", "  Then more."]

    def test_sentence_lengths(self, text_file, capsys):
        """--print-sentence-lengths reports lengths on stderr."""
        main(["--print-sentence-lengths", text_file("a b. c.")])
        err = capsys.readouterr().err
        assert "Length:\t3" in err
        assert "Length:\t2" in err

    def test_no_tokenization(self, text_file, capsys):
        """--no-tokenization splits on newlines only."""
        main(["--no-tokenization", text_file("First. Same line\n\nSecond line\n")])
        assert capsys.readouterr().out.splitlines() == ["First . Same line", "Second line"]

    def test_whitespace_tokenization_and_tags(self, text_file, capsys):
        """Whitespace tokenization with tag splitting."""
        main(["--whitespace-tokenization", "--tag", "_", text_file("dog_NN runs_VBZ\ncat_NN ._.\n")])
        assert capsys.readouterr().out.splitlines() == ["dog runs", "cat ."]

    def test_xml(self, text_file, capsys):
        """--xml restricts processing to matching elements."""
        main(["--xml", "s", text_file("<doc><h>Skip me.</h><s>Keep me.</s><s></s></doc>")])
        assert capsys.readouterr().out.splitlines() == ["Keep me ."]

    def test_encoding(self, text_file, capsys):
        """--encoding selects the input encoding."""
        main(["--encoding", "latin-1", text_file("Köln.", encoding="latin-1")])
        assert capsys.readouterr().out.splitlines() == ["Köln ."]

    def test_stdin(self, monkeypatch, capsys):
        """Standard input is read when no files are given."""
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"From stdin. Yes.")))
        assert main([]) == 0
        assert capsys.readouterr().out.splitlines() == ["From stdin .", "Yes ."]

    def test_config_file(self, text_file, tmp_path, capsys):
        """A YAML config file supplies options."""
        config = tmp_path / "opts.yaml"
        config.write_text("tokenizer: none\nsentence_delimiters: [';']\n", encoding="utf-8")
        main(["--config", str(config), text_file("a . b ; c")])
        assert capsys.readouterr().out.splitlines() == ["a . b ;", "c"]

    def test_conflicting_tokenizer_flags(self, text_file, capsys):
        """More than one tokenizer flag is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(["--suppress-escaping", "--whitespace-tokenization", text_file("a.")])
        assert exc.value.code != 0
        out, err = capsys.readouterr()
        assert "usage:" in err
        assert out == ""

    def test_missing_file(self, tmp_path, capsys):
        """A missing input file is reported with exit code 1."""
        assert main([str(tmp_path / "missing.txt")]) == 1
        assert "Could not open path" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        """An invalid config file is reported with exit code 1."""
        config = tmp_path / "bad.yaml"
        config.write_text("tokenizer: nope\n", encoding="utf-8")
        assert main(["--config", str(config)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_verbose_logging(self, text_file, capsys):
        """--verbose logs progress to stderr."""
        main(["-v", text_file("a.")])
        assert "INFO: document_opened doc_type=plain" in capsys.readouterr().err

    def test_bad_tokenizer_options_open_no_file(self, text_file, opened_documents, capsys):
        """Invalid tokenizer options are rejected before any input is opened."""
        assert main(["--tokenizer-options", "bogus", text_file("a.")]) == 1
        assert opened_documents == []
        assert "Unknown tokenizer option" in capsys.readouterr().err

    def test_file_closed_when_segmenting_fails(self, text_file, opened_documents, monkeypatch, capsys):
        """A document that fails to segment is still closed."""
        def failing_strategy(stream, config, **kwargs):
            raise InvalidArgument("cannot segment")

        monkeypatch.setitem(STRATEGIES, DocType.PLAIN, failing_strategy)
        assert main([text_file("a.")]) == 1
        assert len(opened_documents) == 1
        assert opened_documents[0].closed
        assert "cannot segment" in capsys.readouterr().err
