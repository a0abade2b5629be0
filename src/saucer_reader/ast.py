'''
dataclases del AST (Atom, MacroForm, formas delimitadas, envíos de mensaje) e igualdad estructural
'''

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union

from .tokens import SourceInfo

class ASTType(str, Enum):
    ATOM = "Atom"
    MACRO_FORM = "MacroForm"
    TARGETTED_SEND = "TargettedSend"
    PARTIAL_SEND = "PartialSend"
    IMPLICIT_SELF_SEND = "ImplicitSelfSend"
    PARENTHESIZED_FORM = "ParenthesizedForm"
    BRACED_FORM = "BracedForm"

# ---- Nodos ----
# Todos son inmutables; una "modificación" crea un nodo nuevo que comparte los hijos.

@dataclass(frozen=True)
class Atom:
    """Literal opaco; el tipo de `raw` lo decide el cliente de lectura."""
    raw: Any
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.ATOM

@dataclass(frozen=True)
class MacroForm:
    """Secuencia de modificadores; si el último es un BracedForm, su interior es el cuerpo."""
    modifiers: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.MACRO_FORM

    @property
    def tail_modifier(self) -> Optional["AST"]:
        return self.modifiers[-1] if self.modifiers else None

    @property
    def body(self) -> Tuple["AST", ...]:
        inner = tail_modifier_inner(self)
        return () if inner is None else inner

@dataclass(frozen=True)
class ParenthesizedForm:
    inner: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.PARENTHESIZED_FORM

@dataclass(frozen=True)
class BracedForm:
    inner: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.BRACED_FORM

@dataclass(frozen=True)
class ImplicitSelfSend:
    """Envío sin receptor explícito: `foo(1, 2)` o `foo`."""
    selector: Atom
    args: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.IMPLICIT_SELF_SEND

@dataclass(frozen=True)
class PartialSend:
    """Envío introducido por '.', el receptor lo aporta el contexto: `.height`."""
    selector: Atom
    args: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.PARTIAL_SEND

@dataclass(frozen=True)
class TargettedSend:
    """Envío con receptor explícito, también usado para operadores infijos."""
    target: "AST"
    selector: Atom
    args: Tuple["AST", ...]
    source_info: SourceInfo = field(compare=False)
    ast_type = ASTType.TARGETTED_SEND

MessageSend = Union[ImplicitSelfSend, PartialSend, TargettedSend]
AST = Union[Atom, MacroForm, ParenthesizedForm, BracedForm, ImplicitSelfSend, PartialSend, TargettedSend]

# ---- Predicados ----

def is_atom(ast: Any) -> bool:
    return isinstance(ast, Atom)

def is_macro_form(ast: Any) -> bool:
    return isinstance(ast, MacroForm)

def is_parenthesized_form(ast: Any) -> bool:
    return isinstance(ast, ParenthesizedForm)

def is_braced_form(ast: Any) -> bool:
    return isinstance(ast, BracedForm)

def is_implicit_self_send(ast: Any) -> bool:
    return isinstance(ast, ImplicitSelfSend)

def is_partial_send(ast: Any) -> bool:
    return isinstance(ast, PartialSend)

def is_targetted_send(ast: Any) -> bool:
    return isinstance(ast, TargettedSend)

def is_message_send(ast: Any) -> bool:
    return isinstance(ast, (ImplicitSelfSend, PartialSend, TargettedSend))

# ---- Igualdad estructural ----

def is_ast_sequence_equal(a: Sequence[AST], b: Sequence[AST]) -> bool:
    if len(a) != len(b):
        return False
    return all(is_ast_equal(x, y) for x, y in zip(a, b))

def is_ast_equal(a: AST, b: AST) -> bool:
    """Igualdad por variante; ignora posiciones en el fuente.

    Los átomos son iguales si sus `raw` lo son; las formas compuestas si la
    etiqueta coincide y todos los hijos son iguales en orden.
    """
    if a is b:
        return True
    if a.ast_type is not b.ast_type:
        return False
    if isinstance(a, Atom):
        return a.raw == b.raw
    if isinstance(a, MacroForm):
        return is_ast_sequence_equal(a.modifiers, b.modifiers)
    if isinstance(a, (ParenthesizedForm, BracedForm)):
        return is_ast_sequence_equal(a.inner, b.inner)
    if isinstance(a, TargettedSend):
        return (is_ast_equal(a.target, b.target)
                and is_ast_equal(a.selector, b.selector)
                and is_ast_sequence_equal(a.args, b.args))
    if isinstance(a, (ImplicitSelfSend, PartialSend)):
        return is_ast_equal(a.selector, b.selector) and is_ast_sequence_equal(a.args, b.args)
    raise TypeError(f"not an AST node: {a!r}")

# ---- Desestructuración ----

def tail_modifier_inner(form: MacroForm) -> Optional[Tuple[AST, ...]]:
    """Interior del último modificador si es un BracedForm; None en otro caso."""
    tail = form.tail_modifier
    if isinstance(tail, BracedForm):
        return tail.inner
    return None

def with_modifiers(form: MacroForm, modifiers: Sequence[AST]) -> MacroForm:
    return MacroForm(tuple(modifiers), form.source_info)

def with_inner(form: Union[ParenthesizedForm, BracedForm], inner: Sequence[AST]):
    return type(form)(tuple(inner), form.source_info)
