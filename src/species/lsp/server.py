import os
import sys
import logging
from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_SAVE,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidSaveTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    Range,
    Position,
)
from species.parser.preprocessor import DEFAULT_MARKER, extract_math_blocks
from species.syntax import MathSyntaxError, parse_math_block

logger = logging.getLogger(__name__)

server = LanguageServer("species-ls", "v0.1")


def block_diagnostic(block, pos, message):
    line, column = block.locate(pos)
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=column),
            end=Position(line=line, character=column + 1),
        ),
        message=message,
        severity=DiagnosticSeverity.Error,
        source="species",
    )


def collect_diagnostics(content, marker=DEFAULT_MARKER):
    diagnostics = []

    for block in extract_math_blocks(content, marker):
        try:
            _, rest = parse_math_block(block.content)
        except MathSyntaxError as e:
            diagnostics.append(block_diagnostic(block, e.pos_in_stream, f"Parse Error: {e}"))
            continue

        if rest:
            pos = len(block.content) - len(rest)
            diagnostics.append(block_diagnostic(block, pos, "Parse Error: unparsed text after \\end"))

    return diagnostics


def validate(ls: LanguageServer, params):
    text_doc = ls.workspace.get_text_document(params.text_document.uri)
    uri = params.text_document.uri

    marker = os.environ.get("SPECIES_MARKER", DEFAULT_MARKER)
    diagnostics = collect_diagnostics(text_doc.source, marker)
    logger.debug("%s: %d diagnostics", uri, len(diagnostics))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls, params: DidOpenTextDocumentParams):
    validate(ls, params)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls, params: DidChangeTextDocumentParams):
    validate(ls, params)


@server.feature(TEXT_DOCUMENT_DID_SAVE)
def did_save(ls, params: DidSaveTextDocumentParams):
    validate(ls, params)


def main():
    logging.basicConfig(stream=sys.stderr, level=logging.INFO)
    server.start_io()


if __name__ == "__main__":
    main()
