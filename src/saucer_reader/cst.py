'''
CST: clases, métodos y variables léxicas reconocidas a partir de la forma genérica MacroForm
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple, Union

from .ast import (
    AST,
    Atom,
    BracedForm,
    ImplicitSelfSend,
    MacroForm,
    ParenthesizedForm,
)
from .client import is_symbol
from .stream import ItemStream
from .tokens import SourceInfo
from .diagnostics import SourceLocatableError, UnsupportedFeatureError

WriteModifier = Literal["let", "const"]

CLASS_KEYWORD = "class"
EXTENDS_KEYWORD = "extends"
WRITE_MODIFIERS = ("const", "let")
ASSIGNMENT_SELECTOR = "="
ACCESS_KEYWORDS = frozenset({"public", "private", "protected"})
DEFAULT_ACCESS_MODIFIER = "private"

# ---- Registros ----
# Vistas derivadas de un MacroForm ya expandido; `form` es la forma de origen.

@dataclass(frozen=True)
class MethodParameters:
    """Lista de parámetros restringida a nombres simples (sin desestructuración)."""
    inner: Tuple[Atom, ...]
    source_info: SourceInfo = field(compare=False)

@dataclass(frozen=True)
class MethodDefinition:
    form: MacroForm
    name: Atom
    parameters: Optional[MethodParameters]
    access_modifiers: Tuple[AST, ...]
    body: Tuple[AST, ...]
    source_info: SourceInfo = field(compare=False)

    @property
    def modifiers(self) -> Tuple[AST, ...]:
        return self.form.modifiers

    @property
    def tail_modifier(self) -> Optional[AST]:
        return self.form.tail_modifier

@dataclass(frozen=True)
class ClassDefinition:
    form: MacroForm
    name: Atom
    extends_expression: Optional[AST]
    parameters: Optional[MethodParameters]
    access_modifiers: Tuple[AST, ...]
    body: Tuple[AST, ...]
    source_info: SourceInfo = field(compare=False)

    @property
    def modifiers(self) -> Tuple[AST, ...]:
        return self.form.modifiers

    @property
    def tail_modifier(self) -> Optional[AST]:
        return self.form.tail_modifier

@dataclass(frozen=True)
class LexicalVariableForm:
    form: MacroForm
    selector: Atom
    write_modifier: WriteModifier
    # AST cuando se escribe explícitamente; 'private' por defecto
    access_modifier: Union[AST, str]
    assignment_form: AST
    source_info: SourceInfo = field(compare=False)

    @property
    def modifiers(self) -> Tuple[AST, ...]:
        return self.form.modifiers

    @property
    def tail_modifier(self) -> Optional[AST]:
        return self.form.tail_modifier

CSTNode = Union[ClassDefinition, MethodDefinition, LexicalVariableForm]

# ---- Nombres ----

def name_from_ast(ast: Optional[AST]) -> Optional[str]:
    """Texto del selector si `ast` es un ImplicitSelfSend con selector de tipo símbolo."""
    if isinstance(ast, ImplicitSelfSend) and is_symbol(ast.selector):
        return ast.selector.raw
    return None

def _signature(ast: Optional[AST]) -> Optional[Tuple[Atom, Sequence[AST]]]:
    """(nombre, argumentos) de un átomo o de un envío implícito; un símbolo suelto
    se lee como envío implícito sin argumentos."""
    if isinstance(ast, Atom):
        return ast, ()
    if isinstance(ast, ImplicitSelfSend):
        return ast.selector, ast.args
    return None

def _name_atom(ast: AST) -> Optional[Atom]:
    sig = _signature(ast)
    if sig is None or sig[1]:
        return None
    return sig[0]

def is_class_definition(form: MacroForm) -> bool:
    return any(name_from_ast(m) == CLASS_KEYWORD for m in form.modifiers)

# ---- Piezas comunes ----

def parameters_from_asts(items: Sequence[AST], source_info: SourceInfo) -> MethodParameters:
    names: List[Atom] = []
    for item in items:
        atom = _name_atom(item)
        if atom is None:
            raise UnsupportedFeatureError(
                "only plain names are supported as parameters, destructuring is not",
                item.source_info)
        names.append(atom)
    return MethodParameters(tuple(names), source_info)

def parse_access_modifiers(stream: ItemStream[AST], stop_at_keyword: str) -> List[AST]:
    modifiers: List[AST] = []
    while stream.peek_item() is not None and name_from_ast(stream.peek_item()) != stop_at_keyword:
        modifiers.append(stream.read_item())
    return modifiers

def parse_extends(stream: ItemStream[AST]) -> Optional[AST]:
    if name_from_ast(stream.peek_item()) != EXTENDS_KEYWORD:
        return None
    keyword = stream.read_item()
    expression = stream.peek_item()
    if expression is None or isinstance(expression, BracedForm):
        raise SourceLocatableError(
            "extends is used in this class but has no associated expression", keyword.source_info)
    return stream.read_item()

def parse_parameters(stream: ItemStream[AST]) -> Optional[MethodParameters]:
    peeked = stream.peek_item()
    if peeked is None or isinstance(peeked, BracedForm):
        return None
    if isinstance(peeked, ParenthesizedForm):
        stream.read_item()
        return parameters_from_asts(peeked.inner, peeked.source_info)
    raise SourceLocatableError(
        "there shouldn't be anything but the body or parameters here", peeked.source_info)

def parse_body(stream: ItemStream[AST]) -> Tuple[AST, ...]:
    peeked = stream.read_item()
    if peeked is None:
        return ()
    if not isinstance(peeked, BracedForm):
        raise SourceLocatableError("unexpected content in definition", peeked.source_info)
    extra = stream.peek_item()
    if extra is not None:
        raise SourceLocatableError("unexpected content in definition", extra.source_info)
    return peeked.inner

def _signature_parameters(args: Sequence[AST], anchor: AST,
                          stream: ItemStream[AST]) -> Optional[MethodParameters]:
    if args:
        return parameters_from_asts(args, anchor.source_info)
    return parse_parameters(stream)

# ---- Constructores ----

def class_definition_from_macro(form: MacroForm) -> ClassDefinition:
    if not is_class_definition(form):
        raise SourceLocatableError("this form is not a class definition", form.source_info)
    stream: ItemStream[AST] = ItemStream(form.modifiers)
    access_modifiers = parse_access_modifiers(stream, CLASS_KEYWORD)
    keyword = stream.read_item()
    name_ast = stream.read_item()
    sig = _signature(name_ast)
    if sig is None:
        raise SourceLocatableError("class is missing a name", keyword.source_info)
    name, args = sig
    if args:
        # class Point(x, y) extends Base { ... }
        parameters = parameters_from_asts(args, name_ast.source_info)
        extends_expression = parse_extends(stream)
    else:
        extends_expression = parse_extends(stream)
        parameters = parse_parameters(stream)
    body = parse_body(stream)
    return ClassDefinition(
        form=form,
        name=name,
        extends_expression=extends_expression,
        parameters=parameters,
        access_modifiers=tuple(access_modifiers),
        body=body,
        source_info=form.source_info,
    )

def method_definition_from_macro(form: MacroForm) -> MethodDefinition:
    """
    Forma: acceso* firma ('(' parámetros ')')? ('{' cuerpo '}')?

    La firma es el último modificador antes de los parámetros y el cuerpo; puede ser
    un nombre suelto o un envío `nombre(a, b)` que aporta también los parámetros.
    """
    if is_class_definition(form):
        raise SourceLocatableError(
            "this form is a class definition, not a method definition", form.source_info)
    modifiers = form.modifiers
    end = len(modifiers)
    if end and isinstance(modifiers[end - 1], BracedForm):
        end -= 1
    if end and isinstance(modifiers[end - 1], ParenthesizedForm):
        end -= 1
    sig_ast = modifiers[end - 1] if end else None
    sig = _signature(sig_ast)
    if sig is None:
        anchor = sig_ast.source_info if sig_ast is not None else form.source_info
        raise SourceLocatableError("method is missing a name", anchor)
    stream: ItemStream[AST] = ItemStream(modifiers)
    access_modifiers = [stream.read_item() for _ in range(end - 1)]
    stream.read_item()  # firma
    name, args = sig
    parameters = _signature_parameters(args, sig_ast, stream)
    body = parse_body(stream)
    return MethodDefinition(
        form=form,
        name=name,
        parameters=parameters,
        access_modifiers=tuple(access_modifiers),
        body=body,
        source_info=form.source_info,
    )

def definition_from_macro(form: MacroForm) -> Union[ClassDefinition, MethodDefinition]:
    """Clase si algún modificador se llama 'class'; método en otro caso."""
    if is_class_definition(form):
        return class_definition_from_macro(form)
    return method_definition_from_macro(form)

def lexical_variable_form_from_macro(form: MacroForm) -> LexicalVariableForm:
    """acceso* ('const' | 'let') nombre '=' expresión"""
    stream: ItemStream[AST] = ItemStream(form.modifiers)
    access_modifiers: List[AST] = []
    while stream.peek_item() is not None and name_from_ast(stream.peek_item()) not in WRITE_MODIFIERS:
        access_modifiers.append(stream.read_item())
    write_ast = stream.read_item()
    if write_ast is None:
        raise SourceLocatableError("there was no const or let in this assignment form", form.source_info)
    write_modifier = name_from_ast(write_ast)
    if write_ast.args:
        # const (x, y) = ...: el lector pega los paréntesis a 'const'
        raise UnsupportedFeatureError(
            "only a plain name can be bound, destructuring is not supported",
            write_ast.args[0].source_info)
    names: List[AST] = []
    while stream.peek_item() is not None and name_from_ast(stream.peek_item()) != ASSIGNMENT_SELECTOR:
        names.append(stream.read_item())
    assignment = stream.read_item()
    if assignment is None:
        raise SourceLocatableError(f"{write_modifier} form is missing '='", write_ast.source_info)
    expressions = stream.remaining()
    if not names:
        raise SourceLocatableError(f"{write_modifier} form is missing a name", write_ast.source_info)
    if len(names) > 1:
        raise UnsupportedFeatureError(
            "binding more than one name in a single form is not supported", names[1].source_info)
    selector = _name_atom(names[0])
    if selector is None:
        raise UnsupportedFeatureError(
            "only a plain name can be bound, destructuring is not supported", names[0].source_info)
    if not expressions:
        raise SourceLocatableError(
            f"{write_modifier} form has nothing bound after '='", assignment.source_info)
    if len(expressions) > 1:
        raise UnsupportedFeatureError(
            "binding more than one expression in a single form is not supported",
            expressions[1].source_info)
    access_modifier = access_modifiers[0] if access_modifiers else DEFAULT_ACCESS_MODIFIER
    return LexicalVariableForm(
        form=form,
        selector=selector,
        write_modifier=write_modifier,
        access_modifier=access_modifier,
        assignment_form=expressions[0],
        source_info=form.source_info,
    )
