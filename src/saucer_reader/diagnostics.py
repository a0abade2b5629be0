'''
clase Diagnostic, jerarquía de errores recuperables con posición en el fuente
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

from .tokens import SourceInfo

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna,
    ambas en base 1), un mensaje de ayuda (pista) y una vista previa de la línea afectada
    con un acento circunflejo bajo la columna.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    preview: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        if self.preview:
            core += "\n" + self.preview
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None,
          preview: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file, preview)

# ---- Errores recuperables ----

class SaucerError(Exception):
    """Fallo recuperable anclado a una posición del fuente.

    Se lanza para entradas mal formadas pero plausibles; quien llama puede capturarlo
    y convertirlo en Diagnostic con `to_diagnostic`.
    """

    def __init__(self, message: str, source_info: Optional[SourceInfo] = None,
                 *, preview: Optional[str] = None, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source_info = source_info
        self.preview = preview
        self.hint = hint

    def __str__(self) -> str:
        if self.preview:
            return f"{self.message}\n{self.preview}"
        return self.message

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        line = col = None
        if self.source_info is not None:
            line = self.source_info.row + 1
            col = self.source_info.column + 1
        return error(self.message, line=line, col=col, file=file,
                     hint=self.hint, preview=self.preview)

class ReadError(SaucerError):
    """Error del lector (tokens inesperados, delimitadores ausentes, fin de entrada)."""

class SourceLocatableError(SaucerError):
    """Error al construir el CST a partir de una forma macro."""

class UnsupportedFeatureError(SourceLocatableError):
    """Forma reconocible que la implementación todavía no soporta
    (varios nombres en un binding, desestructuración de parámetros, ...)."""
