'''
tabla de macros: expansores con nombre, guardados por un predicado sobre los modificadores
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from .ast import AST, MacroForm

MacroModifierPredicate = Callable[[Sequence[AST]], bool]
# Debe devolver el mismo nodo (por identidad) cuando no reescribe nada; los
# fallos recuperables se lanzan como SourceLocatableError.
MacroExpansionFunction = Callable[[MacroForm], AST]

@dataclass(frozen=True)
class MacroExpander:
    name: str
    predicate: MacroModifierPredicate
    expander: MacroExpansionFunction

class MacroTable:
    """
    Registro de expansores consultado por el caminante de código.

    `find_macro` devuelve el primer expansor registrado cuyo predicado acepta
    los modificadores de la forma: el orden de registro importa.
    Se construye una vez y luego solo se consulta; no es seguro registrar y
    expandir a la vez desde varios hilos.
    """

    def __init__(self):
        self._expanders: Dict[str, MacroExpander] = {}

    def register_macro(self, macro: MacroExpander) -> "MacroTable":
        if macro.name in self._expanders:
            raise ValueError(f"{macro.name} is already defined")
        self._expanders[macro.name] = macro
        return self

    def find_macro(self, form: MacroForm) -> Optional[MacroExpander]:
        for macro in self._expanders.values():
            if macro.predicate(form.modifiers):
                return macro
        return None

    def names(self) -> list[str]:
        return list(self._expanders)

    def __contains__(self, name: str) -> bool:
        return name in self._expanders

    def __len__(self) -> int:
        return len(self._expanders)

def define_macro_expander(table: MacroTable, name: str, predicate: MacroModifierPredicate,
                          expander: MacroExpansionFunction) -> MacroExpander:
    macro = MacroExpander(name=name, predicate=predicate, expander=expander)
    table.register_macro(macro)
    return macro
