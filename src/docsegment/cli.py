"""Command-line interface: split documents into one tokenized sentence per line."""

import argparse
import io
import sys
from typing import Optional, Sequence, Tuple

from .config.loader import ConfigLoadError, load_config
from .config.schema import PreprocessorConfig
from .core.errors import InvalidArgument, StreamReadError
from .core.types import DEFAULT_SENTENCE_DELIMS, WHITESPACE_NEWLINE, DocType, TokenizerSelection
from .preprocessor import DocumentPreprocessor
from .tokenizers import resolve_tokenizer_factory
from .utils import ConsoleLogger, sentence_text


def build_config(args) -> Tuple[PreprocessorConfig, DocType]:
    """Combine the optional config file with command-line flags."""
    base = load_config(args.config) if args.config else PreprocessorConfig()
    updates = {}

    doc_type = DocType.PLAIN
    if args.xml is not None:
        doc_type = DocType.XML
        updates["element_filter"] = args.xml

    if args.no_tokenization:
        updates["explicit_delimiter"] = "\n"
    if args.tag is not None:
        updates["tag_delimiter"] = args.tag
    if args.keep_empty_sentences:
        updates["keep_empty_sentences"] = True

    if args.suppress_escaping:
        updates.update(tokenizer=TokenizerSelection.DEFAULT, tokenizer_options="ptb3Escaping=false")
    elif args.tokenizer_options is not None:
        updates.update(tokenizer=TokenizerSelection.DEFAULT, tokenizer_options=args.tokenizer_options)
    elif args.print_original_text:
        updates.update(tokenizer=TokenizerSelection.DEFAULT, tokenizer_options="invertible=true")
    elif args.whitespace_tokenization:
        updates.update(tokenizer=TokenizerSelection.NONE,
                       sentence_delimiters=DEFAULT_SENTENCE_DELIMS + (WHITESPACE_NEWLINE,))

    data = dict(base)
    data.update(updates)
    config = PreprocessorConfig(**data)
    # Rejects bad tokenizer options before any document is opened
    resolve_tokenizer_factory(config)
    return config, doc_type


def _stdin_stream(encoding: str):
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding=encoding)


def create_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="docsegment",
        description="Split plain text or XML documents into tokenized sentences, one per line"
    )
    parser.add_argument(
        "files", nargs="*",
        help="Documents to read (default: standard input)"
    )
    parser.add_argument(
        "--xml", metavar="ELEMENT",
        help="XML input: only read text inside elements whose name matches this regex"
    )
    parser.add_argument(
        "--encoding", default="utf-8",
        help="Input encoding (default: utf-8)"
    )
    parser.add_argument(
        "--print-sentence-lengths", action="store_true",
        help="Print the length of every sentence to stderr"
    )
    parser.add_argument(
        "--no-tokenization", action="store_true",
        help="Split on newline delimiters only"
    )
    parser.add_argument(
        "--tag", metavar="DELIM",
        help="Input tokens are tagged (e.g. dog_NN); split tags on DELIM"
    )
    parser.add_argument(
        "--keep-empty-sentences", action="store_true",
        help="Keep empty sentences, e.g. to echo blank lines"
    )
    parser.add_argument(
        "--config", metavar="FILE",
        help="YAML file with segmentation options; flags override it"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log progress to stderr"
    )

    tokenizer_group = parser.add_mutually_exclusive_group()
    tokenizer_group.add_argument(
        "--suppress-escaping", action="store_true",
        help="Suppress PTB escaping"
    )
    tokenizer_group.add_argument(
        "--tokenizer-options", metavar="OPTS",
        help="Custom tokenizer options, e.g. 'ptb3Escaping=false,tokenizeNLs'"
    )
    tokenizer_group.add_argument(
        "--print-original-text", action="store_true",
        help="Print sentences with their original text and spacing"
    )
    tokenizer_group.add_argument(
        "--whitespace-tokenization", action="store_true",
        help="Whitespace tokenization only; newlines also end sentences"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    logger = ConsoleLogger() if args.verbose else None

    try:
        config, doc_type = build_config(args)
    except (ConfigLoadError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    num_sents = 0
    for path in args.files or [None]:
        try:
            source = _stdin_stream(args.encoding) if path is None else path
            with DocumentPreprocessor(source, doc_type, config=config,
                                      encoding=args.encoding, logger=logger) as document:
                for sentence in document:
                    num_sents += 1
                    if args.print_sentence_lengths:
                        print(f"Length:\t{len(sentence)}", file=sys.stderr)
                    print(sentence_text(sentence, original_text=args.print_original_text))
        except (InvalidArgument, StreamReadError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    print(f"Read in {num_sents} sentences.", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
