'''
cliente de lectura: cómo un token se convierte en átomo y constructores de las formas compuestas
'''

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from .ast import (
    AST,
    Atom,
    BracedForm,
    ImplicitSelfSend,
    MacroForm,
    ParenthesizedForm,
    PartialSend,
    TargettedSend,
)
from .lexer import OPERATOR_RE
from .tokens import SourceInfo, Token, TokenTag
from .diagnostics import ReadError

class ReaderClient(ABC):
    """Capacidad que el lector consume.

    Las subclases deciden qué es un átomo (`parse_number`, `parse_symbol`,
    `parse_string`) y qué tokens son selectores binarios. Los constructores de
    formas compuestas tienen una implementación por defecto.
    """

    @abstractmethod
    def parse_number(self, token: Token) -> Atom: ...

    @abstractmethod
    def parse_symbol(self, token: Token) -> Atom: ...

    @abstractmethod
    def parse_string(self, token: Token) -> Atom: ...

    @abstractmethod
    def is_binary_selector(self, token: Token) -> bool: ...

    def create_parenthesized_form(self, source_start: SourceInfo, inner: Sequence[AST]) -> ParenthesizedForm:
        return ParenthesizedForm(tuple(inner), source_start)

    def create_braced_form(self, source_start: SourceInfo, inner: Sequence[AST]) -> BracedForm:
        return BracedForm(tuple(inner), source_start)

    def create_partial_send(self, selector: Atom, args: Sequence[AST]) -> PartialSend:
        return PartialSend(selector, tuple(args), selector.source_info)

    def create_implicit_self_send(self, selector: Atom, args: Sequence[AST]) -> ImplicitSelfSend:
        return ImplicitSelfSend(selector, tuple(args), selector.source_info)

    def create_targetted_send(self, target: AST, selector: Atom, args: Sequence[AST]) -> TargettedSend:
        return TargettedSend(target, selector, tuple(args), target.source_info)

    def create_macro_form(self, source_start: SourceInfo, modifiers: Sequence[AST]) -> MacroForm:
        return MacroForm(tuple(modifiers), source_start)

# ---- Cliente de referencia ----

@dataclass(frozen=True)
class NumberAtom(Atom):
    pass

@dataclass(frozen=True)
class SymbolAtom(Atom):
    @property
    def words(self) -> List[str]:
        return self.raw.split(" ")

@dataclass(frozen=True)
class StringAtom(Atom):
    pass

def is_number(ast) -> bool:
    return isinstance(ast, NumberAtom)

def is_symbol(ast) -> bool:
    return isinstance(ast, SymbolAtom)

def is_string(ast) -> bool:
    return isinstance(ast, StringAtom)

_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_RUN_RE = re.compile(r"([A-Z])([A-Z][a-z])")
_WORD_SPLIT_RE = re.compile(r"[-_\s]+")

def no_case(text: str) -> str:
    """'HelloWorld', 'hello-world' y 'hello_world' -> 'hello world'.

    Los símbolos de operador ('===', '&&') se devuelven tal cual.
    """
    if not text or OPERATOR_RE.match(text[0]):
        return text
    spaced = _UPPER_RUN_RE.sub(r"\1 \2", _LOWER_UPPER_RE.sub(r"\1 \2", text))
    words = [w.lower() for w in _WORD_SPLIT_RE.split(spaced) if w]
    return " ".join(words)

# '=' solo es asignación, nunca un operador infijo
NON_INFIX_OPERATORS = frozenset({"="})

class StandardReadClient(ReaderClient):
    """Números como float, símbolos normalizados con `no_case`, cadenas sin tocar.

    Un símbolo es selector binario si todos sus caracteres son de operador y no es
    '='; por eso `const x = a + b` deja varias expresiones tras el '='.
    """

    def parse_number(self, token: Token) -> NumberAtom:
        try:
            value = float(token.raw)
        except ValueError:
            raise ReadError(f"{token.raw!r} is not a number", token.source_info) from None
        return NumberAtom(value, token.source_info)

    def parse_symbol(self, token: Token) -> SymbolAtom:
        return SymbolAtom(no_case(token.raw), token.source_info)

    def parse_string(self, token: Token) -> StringAtom:
        return StringAtom(token.raw, token.source_info)

    def is_binary_selector(self, token: Token) -> bool:
        if token.tag is not TokenTag.SYMBOL or token.raw in NON_INFIX_OPERATORS:
            return False
        return all(OPERATOR_RE.match(ch) for ch in token.raw)
