'''
caminante de código: expansión de macros hasta punto fijo y reescritura recursiva
'''

from __future__ import annotations
import dataclasses
import logging
from typing import Optional, Sequence, Tuple, Union

from .ast import AST, BracedForm, MacroForm, ParenthesizedForm, with_inner, with_modifiers
from .cst import ClassDefinition, CSTNode, LexicalVariableForm, MethodDefinition
from .macros import MacroTable

logger = logging.getLogger(__name__)

Node = Union[AST, CSTNode]

DEFAULT_MAX_EXPANSION_STEPS = 10_000

class MacroExpansionLimitError(RuntimeError):
    """Un expansor no alcanza un punto fijo (devuelve siempre un nodo nuevo)."""

def macroexpand_1(form: Node, table: MacroTable) -> Node:
    """Un paso de expansión. Devuelve `form` mismo si no hay macro aplicable."""
    if not isinstance(form, MacroForm):
        return form
    macro = table.find_macro(form)
    if macro is None:
        return form
    expansion = macro.expander(form)
    if expansion is not form:
        logger.debug("%s expanded form at %d:%d into %s", macro.name,
                     form.source_info.row, form.source_info.column, type(expansion).__name__)
    return expansion

def macroexpand_all(form: Node, table: MacroTable, *,
                    max_steps: Optional[int] = DEFAULT_MAX_EXPANSION_STEPS) -> Node:
    """
    Aplica `macroexpand_1` mientras el resultado sea otro objeto (identidad, no
    igualdad estructural). Los expansores deben devolver el mismo nodo cuando no
    reescriben; uno que siempre crea un nodo nuevo no termina y, con `max_steps`,
    se reporta con MacroExpansionLimitError. `max_steps=None` quita el límite.
    """
    previous = form
    current = macroexpand_1(previous, table)
    steps = 0
    while current is not previous:
        steps += 1
        if max_steps is not None and steps > max_steps:
            raise MacroExpansionLimitError(
                f"macro expansion did not reach a fixed point after {steps} steps")
        previous = current
        current = macroexpand_1(previous, table)
    return current

def _walk_sequence(items: Sequence[Node], table: MacroTable,
                   max_steps: Optional[int]) -> Tuple[Tuple[Node, ...], bool]:
    walked = tuple(walk(item, table, max_steps=max_steps) for item in items)
    changed = any(new is not old for new, old in zip(walked, items))
    return walked, changed

def walk(form: Node, table: MacroTable, *,
         max_steps: Optional[int] = DEFAULT_MAX_EXPANSION_STEPS) -> Node:
    """
    Expande `form` por completo y luego recorre sus hijos: modificadores de un
    MacroForm, interior de formas delimitadas, cuerpos de clases y métodos y la
    expresión ligada de una variable léxica. Un nodo solo se reconstruye si algún
    hijo cambió; si nada cambia se devuelve el mismo objeto.
    """
    expanded = macroexpand_all(form, table, max_steps=max_steps)
    if isinstance(expanded, MacroForm):
        modifiers, changed = _walk_sequence(expanded.modifiers, table, max_steps)
        return with_modifiers(expanded, modifiers) if changed else expanded
    if isinstance(expanded, (BracedForm, ParenthesizedForm)):
        inner, changed = _walk_sequence(expanded.inner, table, max_steps)
        return with_inner(expanded, inner) if changed else expanded
    if isinstance(expanded, (ClassDefinition, MethodDefinition)):
        body, changed = _walk_sequence(expanded.body, table, max_steps)
        return dataclasses.replace(expanded, body=body) if changed else expanded
    if isinstance(expanded, LexicalVariableForm):
        bound = walk(expanded.assignment_form, table, max_steps=max_steps)
        if bound is expanded.assignment_form:
            return expanded
        return dataclasses.replace(expanded, assignment_form=bound)
    return expanded
