from __future__ import annotations
import re
from typing import Callable, Dict, List, Optional, TypeVar

from .stream import RowTrackingStringStream
from .tokens import (
    SINGLE_CHAR_TAGS,
    SourceInfo,
    Token,
    TokenTag,
    create_source_preview,
)
from .diagnostics import ReadError

T = TypeVar("T")

LETTER_RE = re.compile(r"[A-Za-z]")
DIGIT_RE = re.compile(r"[0-9]")
WORD_SYMBOL_RE = re.compile(r"[A-Za-z0-9_\-<>]")
# One class for every operator character, so '+<' is lexed as a single symbol.
OPERATOR_RE = re.compile(r"[-+=<>&]")

class TokenClassificationError(ValueError):
    """The next character cannot start any token."""

def _read_while(pattern: re.Pattern, stream: RowTrackingStringStream) -> str:
    out: List[str] = []
    while stream.peek_char() is not None and pattern.match(stream.peek_char()):
        out.append(stream.read_char())
    return "".join(out)

def _here(stream: RowTrackingStringStream) -> SourceInfo:
    return SourceInfo(stream.peek_row, stream.peek_column)

def _read_single_char(stream: RowTrackingStringStream, tag: TokenTag) -> Token:
    start = _here(stream)
    return Token(tag, stream.read_char(), start)

def _read_symbol(stream: RowTrackingStringStream, tag: TokenTag) -> Token:
    start = _here(stream)
    ch = stream.peek_char()
    if LETTER_RE.match(ch):
        return Token(tag, _read_while(WORD_SYMBOL_RE, stream), start)
    if OPERATOR_RE.match(ch):
        return Token(tag, _read_while(OPERATOR_RE, stream), start)
    raise TypeError(f"symbol token cannot start with {ch!r}")

def _read_number(stream: RowTrackingStringStream, tag: TokenTag) -> Token:
    start = _here(stream)
    return Token(tag, _read_while(DIGIT_RE, stream), start)

def _read_string(stream: RowTrackingStringStream, tag: TokenTag) -> Token:
    start = _here(stream)
    stream.read_char()  # comilla de apertura
    out: List[str] = []
    while stream.peek_char() is not None and stream.peek_char() != '"':
        out.append(stream.read_char())
    if stream.read_char() is None:
        raise ReadError("unterminated string literal", start,
                        preview=create_source_preview(stream.source, start))
    return Token(tag, "".join(out), start)

TokenParser = Callable[[RowTrackingStringStream, TokenTag], Token]

TOKEN_PARSERS: Dict[TokenTag, TokenParser] = {
    **{tag: _read_single_char for tag in SINGLE_CHAR_TAGS.values()},
    TokenTag.SYMBOL: _read_symbol,
    TokenTag.NUMBER: _read_number,
    TokenTag.STRING: _read_string,
}

def classify(ch: str) -> Optional[TokenTag]:
    """Tag of the token starting with `ch`, or None if no token starts with it."""
    if ch in SINGLE_CHAR_TAGS:
        return SINGLE_CHAR_TAGS[ch]
    if ch == '"':
        return TokenTag.STRING
    if LETTER_RE.match(ch):
        return TokenTag.SYMBOL
    if DIGIT_RE.match(ch):
        return TokenTag.NUMBER
    if OPERATOR_RE.match(ch):
        return TokenTag.SYMBOL
    return None

class TokenStream:
    """Lazy token cursor over a character stream.

    Tokens are produced on demand and cached by position, so re-peeking a
    position is a plain lookup. `position` can be saved and restored to
    backtrack across alternatives.
    """

    def __init__(self, stream: RowTrackingStringStream):
        self.stream = stream
        self.source: List[Token] = []
        self.position = 0

    @classmethod
    def from_string(cls, text: str) -> "TokenStream":
        return cls(RowTrackingStringStream(text))

    def _eat_whitespace(self) -> None:
        while self.stream.peek_char() is not None and self.stream.peek_char().isspace():
            self.stream.read_char()

    def _read_token_to_source(self) -> Optional[Token]:
        self._eat_whitespace()
        ch = self.stream.peek_char()
        if ch is None:
            return None
        tag = classify(ch)
        if tag is None:
            here = _here(self.stream)
            raise TokenClassificationError(
                f"could not find a token tag for {ch!r}\n"
                + create_source_preview(self.stream.source, here))
        token = TOKEN_PARSERS[tag](self.stream, tag)
        self.source.append(token)
        return token

    def _peek_source(self) -> Optional[Token]:
        if self.position < len(self.source):
            return self.source[self.position]
        return self._read_token_to_source()

    def peek(self) -> Optional[Token]:
        return self._peek_source()

    def read(self) -> Optional[Token]:
        token = self._peek_source()
        if token is not None:
            self.position += 1
        return token

    def peek_tag(self) -> Optional[TokenTag]:
        token = self.peek()
        return None if token is None else token.tag

    def save(self) -> int:
        return self.position

    def restore(self, checkpoint: int) -> None:
        if checkpoint > len(self.source):
            raise ValueError(f"checkpoint {checkpoint} is past the tokens read so far")
        self.position = checkpoint

    def saving_position_if(self, predicate: Callable[[T], bool], body: Callable[[], T]) -> T:
        """Runs `body`; restores the position when `predicate` holds for its result."""
        checkpoint = self.save()
        value = body()
        if predicate(value):
            self.restore(checkpoint)
        return value

    def clone(self) -> "TokenStream":
        other = TokenStream(self.stream.clone())
        other.source = list(self.source)
        other.position = self.position
        return other

    def peek_source_info(self) -> SourceInfo:
        token = self.peek()
        if token is not None:
            return token.source_info
        return _here(self.stream)

    def peek_source_preview(self) -> str:
        return create_source_preview(self.stream.source, self.peek_source_info())

    def error(self, message: str) -> ReadError:
        """ReadError anchored at the next token."""
        return ReadError(message, self.peek_source_info(), preview=self.peek_source_preview())

    def assert_peek_tag(self, tag: TokenTag, message: str) -> None:
        if self.peek_tag() is not tag:
            raise self.error(message)
