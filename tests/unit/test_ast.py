import pytest
from src.saucer_reader.reader import read_string
from src.saucer_reader.ast import (
    ASTType, Atom, MacroForm, BracedForm, ImplicitSelfSend,
    is_ast_equal, is_atom, is_macro_form, is_message_send, is_braced_form,
    is_parenthesized_form, is_partial_send, is_targetted_send, is_implicit_self_send,
    tail_modifier_inner, with_modifiers,
)
from src.saucer_reader.tokens import SourceInfo

SAMPLES = [
    "wow",
    "12",
    '"text"',
    "3 + add(2, 3) + 4",
    ".height { }",
    "public eat(a, b) { food; drink }",
    "const x = 3",
    "foo.bar(1)",
    "(a, b)",
]

@pytest.mark.parametrize("src", SAMPLES)
def test_equal_to_itself(src):
    x = read_string(src)
    assert is_ast_equal(x, x)
    assert is_ast_equal(x, read_string(src))

@pytest.mark.parametrize("a, b", [
    ("wow", "12"),
    ("wow", ".wow"),
    ("(a)", "{ a }"),
    ("a + b", "a(b)"),
])
def test_different_tags_are_not_equal(a, b):
    assert not is_ast_equal(read_string(a), read_string(b))

@pytest.mark.parametrize("a, b", [
    ("foo(1, 2)", "foo(1)"),
    ("foo(1)", "foo(1, 2)"),
    ("a b { c }", "a b { d }"),
    ("1 + 2", "1 + 3"),
])
def test_structural_differences(a, b):
    assert not is_ast_equal(read_string(a), read_string(b))

def test_equality_ignores_source_position():
    assert is_ast_equal(read_string("foo(1)"), read_string("\n\n   foo( 1 )"))

def test_predicates_follow_tag():
    form = read_string("(e) .b { f }")
    assert form.ast_type is ASTType.MACRO_FORM
    assert [m.ast_type for m in form.modifiers] == [
        ASTType.PARENTHESIZED_FORM, ASTType.PARTIAL_SEND, ASTType.BRACED_FORM]
    assert is_parenthesized_form(form.modifiers[0])
    assert is_partial_send(form.modifiers[1]) and is_message_send(form.modifiers[1])
    assert is_braced_form(form.modifiers[2])
    assert is_macro_form(form) and not is_atom(form)
    assert is_targetted_send(read_string("c.d"))
    assert is_implicit_self_send(read_string("a")) and is_message_send(read_string("a"))
    assert is_atom(read_string("1")) and not is_message_send(read_string("1"))

def test_tail_modifier_is_derived():
    form = read_string("a b { c }")
    assert form.tail_modifier is form.modifiers[-1]
    shorter = with_modifiers(form, form.modifiers[:2])
    assert tail_modifier_inner(shorter) is None
    assert shorter.body == ()
    assert MacroForm((), SourceInfo(0, 0)).tail_modifier is None

def test_nodes_are_immutable():
    atom = Atom(1, SourceInfo(0, 0))
    with pytest.raises(Exception):
        atom.raw = 2

def test_with_modifiers_shares_children():
    form = read_string("a b { c }")
    rebuilt = with_modifiers(form, form.modifiers)
    assert rebuilt is not form
    assert rebuilt.modifiers[2] is form.modifiers[2]
    assert is_ast_equal(rebuilt, form)
