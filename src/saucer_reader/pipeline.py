from __future__ import annotations
from typing import List, Optional, Tuple

from .client import ReaderClient
from .cst_macros import cst_macro_table
from .macros import MacroTable
from .reader import read_program
from .walker import DEFAULT_MAX_EXPANSION_STEPS, Node, walk
from .diagnostics import Diagnostic, SaucerError

def read_and_walk(text: str, *, filename: str | None = None,
                  table: Optional[MacroTable] = None,
                  client: Optional[ReaderClient] = None,
                  max_steps: Optional[int] = DEFAULT_MAX_EXPANSION_STEPS,
                  ) -> Tuple[List[Node], List[Diagnostic]]:
    """Lee el programa y recorre cada forma de nivel superior con la tabla de macros.

    Devuelve (forms, diagnostics). Las formas que fallan al expandirse se omiten y
    su error queda en diagnostics; un error de lectura detiene todo.
    """
    forms, diags = read_program(text, filename=filename, client=client)
    if diags:
        return [], diags
    table = table if table is not None else cst_macro_table()
    out: List[Node] = []
    for form in forms:
        try:
            out.append(walk(form, table, max_steps=max_steps))
        except SaucerError as ex:
            diags.append(ex.to_diagnostic(file=filename))
    return out, diags
