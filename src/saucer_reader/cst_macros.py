from __future__ import annotations
from typing import Sequence

from .ast import AST, BracedForm
from .cst import (
    ACCESS_KEYWORDS,
    CLASS_KEYWORD,
    WRITE_MODIFIERS,
    class_definition_from_macro,
    lexical_variable_form_from_macro,
    method_definition_from_macro,
    name_from_ast,
)
from .macros import MacroTable, define_macro_expander

def _has_write_modifier(modifiers: Sequence[AST]) -> bool:
    return any(name_from_ast(m) in WRITE_MODIFIERS for m in modifiers)

def _has_class_keyword(modifiers: Sequence[AST]) -> bool:
    return any(name_from_ast(m) == CLASS_KEYWORD for m in modifiers)

def _looks_like_method(modifiers: Sequence[AST]) -> bool:
    return (len(modifiers) >= 2
            and name_from_ast(modifiers[0]) in ACCESS_KEYWORDS
            and isinstance(modifiers[-1], BracedForm))

def cst_macro_table() -> MacroTable:
    """
    Tabla estándar que convierte formas macro en registros CST.

    Orden de registro (la primera coincidencia gana):
      1. LexicalVariableFormExpander: algún modificador es 'const' o 'let'
      2. ClassDefinitionExpander:     algún modificador es 'class'
      3. MethodDefinitionExpander:    empieza con public/private/protected y termina en cuerpo
    'private class Foo { }' es por tanto una clase y no un método.
    """
    table = MacroTable()
    define_macro_expander(table, "LexicalVariableFormExpander",
                          _has_write_modifier, lexical_variable_form_from_macro)
    define_macro_expander(table, "ClassDefinitionExpander",
                          _has_class_keyword, class_definition_from_macro)
    define_macro_expander(table, "MethodDefinitionExpander",
                          _looks_like_method, method_definition_from_macro)
    return table
