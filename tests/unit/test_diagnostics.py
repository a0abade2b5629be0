from src.saucer_reader.diagnostics import error, ReadError, UnsupportedFeatureError, SourceLocatableError
from src.saucer_reader.tokens import SourceInfo

def test_error_str():
    d = error("class is missing a name", line=12, col=8, file="prog.sc", hint="add a name after 'class'")
    s = str(d)
    assert "prog.sc:12:8:" in s
    assert "ERROR: class is missing a name" in s
    assert "(pista: add a name after 'class')" in s

def test_error_to_diagnostic_is_one_based_with_preview():
    ex = ReadError("expected an expression", SourceInfo(0, 4), preview="a b )\n    ^")
    d = ex.to_diagnostic(file="x.sc")
    assert d.severity == "error"
    assert (d.line, d.col) == (1, 5)
    assert str(d).endswith("a b )\n    ^")
    assert str(ex) == "expected an expression\na b )\n    ^"

def test_unsupported_is_source_locatable():
    ex = UnsupportedFeatureError("nope", SourceInfo(2, 0))
    assert isinstance(ex, SourceLocatableError)
    assert ex.to_diagnostic().line == 3
