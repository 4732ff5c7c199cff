"""Erros por arquivo durante o processamento das notas."""

from __future__ import annotations


class NFeError(Exception):
    """Falha que invalida um unico arquivo, nunca o lote inteiro."""


class ParseError(NFeError):
    pass


class MissingElementError(NFeError):
    pass


class ReadError(NFeError):
    pass
