import os
from species.lsp.server import collect_diagnostics, validate
from lsprotocol.types import DiagnosticSeverity


class MockLanguageServer:
    def __init__(self):
        self.workspace = MockWorkspace()
        self.diagnostics = {}

    def text_document_publish_diagnostics(self, params):
        self.diagnostics[params.uri] = params.diagnostics


class MockWorkspace:
    def __init__(self):
        self._docs = {}

    def get_text_document(self, uri):
        return self._docs.get(uri)

    def put_document(self, uri, content):
        self._docs[uri] = MockDocument(content)


class MockDocument:
    def __init__(self, content):
        self.source = content


class MockParams:
    def __init__(self, uri):
        self.text_document = MockTextDocumentIdentifier(uri)


class MockTextDocumentIdentifier:
    def __init__(self, uri):
        self.uri = uri


BROKEN_LIMITS = r"""Title
=====

.. math::
   \begin{array}{llll}
   \production{limits} & \limits &::=&
     \{ \LMIN~\u32, \LMAX~\u32^? \}
   \end{array}
"""


def test_validate_valid_document(types_document):
    ls = MockLanguageServer()
    uri = "file://" + os.path.abspath("types.rst")
    ls.workspace.put_document(uri, types_document)

    validate(ls, MockParams(uri))

    assert ls.diagnostics.get(uri) == []


def test_validate_syntax_error():
    ls = MockLanguageServer()
    uri = "file://" + os.path.abspath("limits.rst")
    ls.workspace.put_document(uri, BROKEN_LIMITS)

    validate(ls, MockParams(uri))

    diags = ls.diagnostics[uri]
    assert len(diags) == 1
    d = diags[0]
    assert d.severity == DiagnosticSeverity.Error
    assert d.source == "species"
    assert "Parse Error" in d.message
    # the missing `\\` is detected where `\end{array}` starts
    assert d.range.start.line == 7
    assert d.range.start.character == 3


def test_marker_from_environment(monkeypatch):
    monkeypatch.setenv("SPECIES_MARKER", ".. productionlist::")
    ls = MockLanguageServer()
    uri = "file:///tmp/limits.rst"
    ls.workspace.put_document(uri, BROKEN_LIMITS)

    validate(ls, MockParams(uri))

    assert ls.diagnostics[uri] == []


def test_trailing_text_is_reported():
    content = ".. math::\n   \\begin{array}{l}\\production{a}&\\a&::=&\\u32\\\\\\end{array} \\foo\n"
    diags = collect_diagnostics(content)
    assert len(diags) == 1
    assert "unparsed text" in diags[0].message
    assert diags[0].range.start.line == 1
