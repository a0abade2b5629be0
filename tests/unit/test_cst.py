import pytest
from src.saucer_reader.reader import read_string
from src.saucer_reader.cst import (
    ClassDefinition, MethodDefinition, LexicalVariableForm, MethodParameters,
    name_from_ast, is_class_definition, definition_from_macro,
    class_definition_from_macro, method_definition_from_macro,
    lexical_variable_form_from_macro,
)
from src.saucer_reader.ast import is_ast_equal
from src.saucer_reader.diagnostics import SourceLocatableError, UnsupportedFeatureError
from src.saucer_reader.tokens import SourceInfo

# --- name_from_ast ---
@pytest.mark.parametrize("src, expected", [
    ("class", "class"),
    ("fooBar", "foo bar"),
    ("===", "==="),
    ("12", None),
    ('"class"', None),
    (".class", None),
    ("(class)", None),
])
def test_name_from_ast(src, expected):
    assert name_from_ast(read_string(src)) == expected

# --- clase o método ---
@pytest.mark.parametrize("src, kind", [
    ("class Foo { }", ClassDefinition),
    ("public class Foo { }", ClassDefinition),
    ("public foo() { }", MethodDefinition),
    ("foo { }", MethodDefinition),
])
def test_definition_routing(src, kind):
    form = read_string(src)
    assert is_class_definition(form) == (kind is ClassDefinition)
    assert isinstance(definition_from_macro(form), kind)

def test_class_definition_fields():
    form = read_string("public static class Point extends Base { a; b }")
    cst = class_definition_from_macro(form)
    assert [m.selector.raw for m in cst.access_modifiers] == ["public", "static"]
    assert cst.name.raw == "point"
    assert cst.extends_expression.selector.raw == "base"
    assert cst.parameters is None
    assert [b.selector.raw for b in cst.body] == ["a", "b"]
    assert cst.form is form and cst.modifiers is form.modifiers
    assert cst.tail_modifier is form.tail_modifier

def test_class_without_extends_or_parameters():
    cst = class_definition_from_macro(read_string("class Foo { }"))
    assert cst.extends_expression is None
    assert cst.parameters is None
    assert cst.access_modifiers == ()
    assert cst.body == ()

def test_class_signature_with_parameters():
    cst = class_definition_from_macro(read_string("class Point(x, y) extends Base { }"))
    assert cst.name.raw == "point"
    assert [p.raw for p in cst.parameters.inner] == ["x", "y"]
    assert cst.extends_expression.selector.raw == "base"

def test_class_without_body():
    cst = class_definition_from_macro(read_string("class Foo"))
    assert cst.body == ()

def test_class_missing_name():
    form = read_string("public class { }")
    with pytest.raises(SourceLocatableError, match="class is missing a name") as ex:
        class_definition_from_macro(form)
    assert ex.value.source_info == SourceInfo(0, 7)

def test_extends_without_expression():
    with pytest.raises(SourceLocatableError, match="extends"):
        class_definition_from_macro(read_string("class Foo extends { }"))

def test_unexpected_trailing_content():
    with pytest.raises(SourceLocatableError, match="unexpected content in definition"):
        class_definition_from_macro(read_string("class Foo { } { }"))

def test_content_where_parameters_belong():
    with pytest.raises(SourceLocatableError, match="body or parameters"):
        class_definition_from_macro(read_string("class Foo 12 { }"))

def test_destructuring_parameters_unsupported():
    with pytest.raises(UnsupportedFeatureError):
        class_definition_from_macro(read_string("class Foo ((a, b)) { }"))

def test_class_builder_on_non_class_form():
    with pytest.raises(SourceLocatableError, match="not a class"):
        class_definition_from_macro(read_string("public foo { }"))

# --- métodos ---
def test_method_definition_fields():
    form = read_string("public eat(food, drink) { chew; swallow }")
    cst = method_definition_from_macro(form)
    assert [m.selector.raw for m in cst.access_modifiers] == ["public"]
    assert cst.name.raw == "eat"
    assert [p.raw for p in cst.parameters.inner] == ["food", "drink"]
    assert [b.selector.raw for b in cst.body] == ["chew", "swallow"]

def test_method_with_separate_parameter_list():
    cst = method_definition_from_macro(read_string("private 1 (a) { }"))
    assert cst.name.raw == 1
    assert [p.raw for p in cst.parameters.inner] == ["a"]

def test_method_without_parameters():
    cst = method_definition_from_macro(read_string("public static size { 0 }"))
    assert cst.name.raw == "size"
    assert cst.parameters is None
    assert len(cst.access_modifiers) == 2

@pytest.mark.parametrize("src", ["public eat() { }", "public eat { }"])
def test_empty_parentheses_are_not_recorded(src):
    cst = method_definition_from_macro(read_string(src))
    assert cst.name.raw == "eat"
    assert cst.parameters is None

def test_method_missing_name():
    with pytest.raises(SourceLocatableError, match="method is missing a name"):
        method_definition_from_macro(read_string("public { } { }"))

def test_method_builder_on_class_form():
    with pytest.raises(SourceLocatableError):
        method_definition_from_macro(read_string("class Foo { }"))

# --- variables léxicas ---
def test_const_form():
    form = read_string("const x = 3")
    cst = lexical_variable_form_from_macro(form)
    assert isinstance(cst, LexicalVariableForm)
    assert cst.selector.raw == "x"
    assert cst.write_modifier == "const"
    assert cst.access_modifier == "private"
    assert cst.assignment_form.raw == 3
    assert cst.source_info == form.source_info

def test_let_form_with_access_modifier():
    form = read_string("public let count = add(1, 2)")
    cst = lexical_variable_form_from_macro(form)
    assert cst.write_modifier == "let"
    assert cst.access_modifier is form.modifiers[0]
    assert is_ast_equal(cst.assignment_form, read_string("add(1, 2)"))

@pytest.mark.parametrize("src, error, message", [
    ("public x = 3", SourceLocatableError, "no const or let"),
    ("const x 3", SourceLocatableError, "missing '='"),
    ("const = 3", SourceLocatableError, "missing a name"),
    ("const x =", SourceLocatableError, "nothing bound"),
    ("const x y = 3", UnsupportedFeatureError, "more than one name"),
    ("const (x, y) = 3", UnsupportedFeatureError, "destructuring"),
    ("const x = 3 4", UnsupportedFeatureError, "more than one expression"),
])
def test_lexical_variable_errors(src, error, message):
    with pytest.raises(error, match=message):
        lexical_variable_form_from_macro(read_string(src))

def test_destructuring_error_points_at_first_name():
    with pytest.raises(UnsupportedFeatureError) as ex:
        lexical_variable_form_from_macro(read_string("const (x, y) = 3"))
    assert ex.value.source_info == SourceInfo(0, 7)

def test_infix_after_assignment_is_not_one_expression():
    # '=' no es infijo, así que 'a + b' llega como varias partes
    with pytest.raises(UnsupportedFeatureError, match="more than one expression"):
        lexical_variable_form_from_macro(read_string("const x = a + b"))

def test_class_with_separate_parameter_list():
    cst = class_definition_from_macro(read_string('class Foo extends "base" (x, y) { }'))
    assert cst.extends_expression.raw == "base"
    assert isinstance(cst.parameters, MethodParameters)
    assert [p.raw for p in cst.parameters.inner] == ["x", "y"]
    assert cst.parameters.source_info == SourceInfo(0, 25)
