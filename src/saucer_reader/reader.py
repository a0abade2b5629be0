# src/saucer_reader/reader.py
from __future__ import annotations
from typing import Collection, List, Optional, Tuple

from .ast import AST, BracedForm, ParenthesizedForm, is_braced_form
from .client import ReaderClient, StandardReadClient
from .lexer import TokenStream
from .tokens import TERMINATOR_TAGS, TokenTag
from .diagnostics import Diagnostic, SaucerError

ARGUMENT_DELIMITERS = (TokenTag.COMMA,)
BODY_DELIMITERS = (TokenTag.COMMA, TokenTag.SEMICOLON)

def _is_terminator(tag: Optional[TokenTag]) -> bool:
    return tag is None or tag in TERMINATOR_TAGS

def _is_none(value) -> bool:
    return value is None

class Reader:
    """
    Lector por descenso recursivo. Cada llamada a `read_expression` produce
    exactamente un nodo y deja sin consumir el terminador (';' ',' '}' ')' o fin).

    Gramática:
      expression  := modifier (binarySelector expression)?
      modifier    := messageSend | literal | '(' list ')' | '{' list '}'
      messageSend := '.' symbol args? | symbol ('.' expression | args?)
      macroForm   := modifier+            (cuando no termina inmediatamente)
    """

    def __init__(self, client: ReaderClient):
        self.client = client

    # ---- Listas ----

    def read_inner_list(self, stream: TokenStream, delimiters: Collection[TokenTag],
                        close: Optional[TokenTag]) -> List[AST]:
        """Lee elementos separados por `delimiters` hasta `close` (sin consumirlo).

        El primer elemento no necesita delimitador; los siguientes sí. Se acepta
        un delimitador final justo antes del cierre.
        """
        items: List[AST] = []
        if stream.peek_tag() is not close:
            items.append(self.read_expression(stream))
        while stream.peek_tag() is not close:
            tag = stream.peek_tag()
            if tag is None:
                raise stream.error(f"unexpected end of input, expected {close.value}")
            if tag not in delimiters:
                expected = " or ".join(d.value for d in delimiters)
                raise stream.error(f"expected a delimiter {expected} but got {tag.value}")
            stream.read()  # delimitador
            if stream.peek_tag() is close:
                break
            items.append(self.read_expression(stream))
        return items

    def read_delimited_list(self, stream: TokenStream, open_tag: TokenTag,
                            delimiters: Collection[TokenTag], close: TokenTag) -> List[AST]:
        if stream.peek_tag() is not open_tag:
            raise TypeError(
                f"read_delimited_list expected {open_tag.value} but got {stream.peek_tag()}")
        stream.read()
        items = self.read_inner_list(stream, delimiters, close)
        stream.read()  # cierre
        return items

    def read_message_arguments(self, stream: TokenStream) -> List[AST]:
        if stream.peek_tag() is TokenTag.OPEN_PAREN:
            return self.read_delimited_list(
                stream, TokenTag.OPEN_PAREN, ARGUMENT_DELIMITERS, TokenTag.CLOSE_PAREN)
        return []

    def read_body(self, stream: TokenStream) -> List[AST]:
        return self.read_delimited_list(
            stream, TokenTag.OPEN_BRACE, BODY_DELIMITERS, TokenTag.CLOSE_BRACE)

    # ---- Alternativas de modificador (None = no coincide) ----

    def maybe_read_literal(self, stream: TokenStream) -> Optional[AST]:
        tag = stream.peek_tag()
        if tag is TokenTag.NUMBER:
            return self.client.parse_number(stream.read())
        if tag is TokenTag.STRING:
            return self.client.parse_string(stream.read())
        return None

    def maybe_read_message_send(self, stream: TokenStream) -> Optional[AST]:
        tag = stream.peek_tag()
        if tag is TokenTag.DOT:
            stream.read()
            if stream.peek_tag() is not TokenTag.SYMBOL:
                return None
            selector = self.client.parse_symbol(stream.read())
            return self.client.create_partial_send(selector, self.read_message_arguments(stream))
        if tag is TokenTag.SYMBOL:
            selector = self.client.parse_symbol(stream.read())
            if stream.peek_tag() is TokenTag.DOT:
                # el símbolo ya leído es el selector; el receptor es la expresión que sigue
                target = self.read_expression(stream)
                return self.client.create_targetted_send(
                    target, selector, self.read_message_arguments(stream))
            return self.client.create_implicit_self_send(selector, self.read_message_arguments(stream))
        return None

    def maybe_read_parenthesized_form(self, stream: TokenStream) -> Optional[ParenthesizedForm]:
        if stream.peek_tag() is not TokenTag.OPEN_PAREN:
            return None
        start = stream.peek().source_info
        inner = self.read_delimited_list(
            stream, TokenTag.OPEN_PAREN, ARGUMENT_DELIMITERS, TokenTag.CLOSE_PAREN)
        return self.client.create_parenthesized_form(start, inner)

    def maybe_read_braced_form(self, stream: TokenStream) -> Optional[BracedForm]:
        if stream.peek_tag() is not TokenTag.OPEN_BRACE:
            return None
        start = stream.peek().source_info
        return self.client.create_braced_form(start, self.read_body(stream))

    def maybe_read_modifier(self, stream: TokenStream) -> Optional[AST]:
        for attempt in (self.maybe_read_message_send,
                        self.maybe_read_literal,
                        self.maybe_read_parenthesized_form,
                        self.maybe_read_braced_form):
            result = stream.saving_position_if(_is_none, lambda: attempt(stream))
            if result is not None:
                return result
        return None

    # ---- Expresiones ----

    def read_expression(self, stream: TokenStream) -> AST:
        modifier = self.maybe_read_modifier(stream)
        if modifier is None:
            raise stream.error("expected an expression")
        # operadores infijos, asociativos por la derecha
        peeked = stream.peek()
        if peeked is not None and self.client.is_binary_selector(peeked):
            operator = self.client.parse_symbol(stream.read())
            modifier = self.client.create_targetted_send(
                modifier, operator, [self.read_expression(stream)])
        if _is_terminator(stream.peek_tag()):
            return modifier
        parts: List[AST] = [modifier]
        while True:
            nxt = self.maybe_read_modifier(stream)
            if nxt is None:
                break
            parts.append(nxt)
        if not _is_terminator(stream.peek_tag()):
            if not is_braced_form(parts[-1]):
                raise stream.error("was expecting a body for this macro form")
            raise stream.error("unexpected content after the body of this macro form")
        return self.client.create_macro_form(modifier.source_info, parts)

def read_string(text: str, client: Optional[ReaderClient] = None) -> AST:
    """Lee una sola expresión de `text`."""
    stream = TokenStream.from_string(text)
    return Reader(client or StandardReadClient()).read_expression(stream)

def read_program(text: str, *, filename: Optional[str] = None,
                 client: Optional[ReaderClient] = None) -> Tuple[List[AST], List[Diagnostic]]:
    """
    Devuelve (forms, diagnostics) donde forms son las expresiones de nivel superior
    separadas por ';' o ','. No hay resincronización: el primer error detiene la lectura.
    """
    stream = TokenStream.from_string(text)
    reader = Reader(client or StandardReadClient())
    try:
        forms = reader.read_inner_list(stream, BODY_DELIMITERS, None)
    except SaucerError as ex:
        return [], [ex.to_diagnostic(file=filename)]
    return forms, []
