"""Funcoes auxiliares para extracao de itens."""

from __future__ import annotations

import datetime as dt
import re
from typing import List, Optional

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F]")
_BOM = "\ufeff"

SEM_CHAVE = "N/A"

# Formatos aceitos para dhEmi (%z aceita "Z", "-03:00" e "-0300").
_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)


def sanitize_xml(text: str) -> str:
    """Remove caracteres de controle invalidos em XML e o BOM inicial."""

    cleaned = _CONTROL_CHARS.sub("", text)
    if cleaned.startswith(_BOM):
        cleaned = cleaned[1:]
    return cleaned


def normalise_key(chave: Optional[str]) -> str:
    if chave is None:
        return SEM_CHAVE
    return chave.replace("NFe", "", 1)


def parse_datetime(value: Optional[str]) -> Optional[dt.datetime]:
    if not value:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return dt.datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def format_emissao(value: Optional[str]) -> str:
    """Formata ``dhEmi`` como ``dd/mm/aaaa HH:MM:SS``.

    Mantem o horario declarado na nota. Quando o texto nao segue nenhum
    formato de ``_DATE_FORMATS``, devolve o texto original.
    """

    if not value:
        return ""
    parsed = parse_datetime(value)
    if parsed is None:
        return value
    return parsed.strftime("%d/%m/%Y %H:%M:%S")


def split_prefixes(text: str) -> List[str]:
    return [ncm.strip() for ncm in re.split(r"[\n,]", text) if ncm.strip()]
