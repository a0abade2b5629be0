'''
cursores sobre el texto fuente (con fila/columna) y sobre listas de nodos
'''

from __future__ import annotations
from typing import Generic, Optional, Sequence, TypeVar

T = TypeVar("T")

class RowTrackingStringStream:
    """Flujo de caracteres que recuerda la fila y columna (base 0) del próximo carácter."""

    def __init__(self, source: str, position: int = 0):
        self.source = source
        self.position = 0
        self.peek_row = 0
        self.peek_column = 0
        while self.position < position:
            self.read_char()

    def peek_char(self) -> Optional[str]:
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def read_char(self) -> Optional[str]:
        ch = self.peek_char()
        if ch is None:
            return None
        self.position += 1
        if ch == "\n":
            self.peek_row += 1
            self.peek_column = 0
        else:
            self.peek_column += 1
        return ch

    def clone(self) -> "RowTrackingStringStream":
        other = RowTrackingStringStream(self.source)
        other.position = self.position
        other.peek_row = self.peek_row
        other.peek_column = self.peek_column
        return other

class ItemStream(Generic[T]):
    """Cursor de solo avance sobre una secuencia ya construida (p.ej. modificadores)."""

    def __init__(self, items: Sequence[T]):
        self.items = items
        self.position = 0

    def peek_item(self) -> Optional[T]:
        if self.position >= len(self.items):
            return None
        return self.items[self.position]

    def read_item(self) -> Optional[T]:
        item = self.peek_item()
        if item is not None:
            self.position += 1
        return item

    def remaining(self) -> list[T]:
        return list(self.items[self.position:])
