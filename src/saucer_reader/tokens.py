'''
tipos de token, posiciones en el fuente y vista previa de una línea
'''

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum

@dataclass(frozen=True)
class SourceInfo:
    """Posición (base 0) del primer carácter de un token o nodo."""
    row: int
    column: int

class TokenTag(str, Enum):
    OPEN_BRACE = "OpenBrace"
    CLOSE_BRACE = "CloseBrace"
    OPEN_PAREN = "OpenParen"
    CLOSE_PAREN = "CloseParen"
    DOT = "Dot"
    SEMICOLON = "Semicolon"
    COMMA = "Comma"
    SYMBOL = "Symbol"
    NUMBER = "Number"
    STRING = "String"

# Caracteres que forman un token por sí solos
SINGLE_CHAR_TAGS = {
    "{": TokenTag.OPEN_BRACE,
    "}": TokenTag.CLOSE_BRACE,
    "(": TokenTag.OPEN_PAREN,
    ")": TokenTag.CLOSE_PAREN,
    ".": TokenTag.DOT,
    ";": TokenTag.SEMICOLON,
    ",": TokenTag.COMMA,
}

# Tokens que terminan una expresión (además del fin de entrada)
TERMINATOR_TAGS = frozenset({
    TokenTag.SEMICOLON,
    TokenTag.COMMA,
    TokenTag.CLOSE_BRACE,
    TokenTag.CLOSE_PAREN,
})

@dataclass(frozen=True)
class Token:
    tag: TokenTag
    raw: str
    source_info: SourceInfo

_ROW_SPLIT_RE = re.compile(r"\r?\n")

def create_source_preview(source: str, source_info: SourceInfo) -> str:
    """Devuelve la línea indicada seguida de una línea con '^' bajo la columna."""
    rows = _ROW_SPLIT_RE.split(source)
    row = rows[source_info.row] if 0 <= source_info.row < len(rows) else ""
    return f"{row}\n{' ' * source_info.column}^"
