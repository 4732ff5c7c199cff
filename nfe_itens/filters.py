"""Filtro de itens por prefixo de NCM."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from .errors import ReadError
from .parser import ItemNota
from .utils import split_prefixes

DEFAULT_NCM_PREFIXES: List[str] = [
    "25202", "2522", "2523", "2713", "2715", "28", "29", "31", "32", "37", "38", "39", "40", "41",
    "44", "4504", "47", "48", "50", "51", "52", "53", "54", "55", "56", "58", "59", "60", "61", "62",
    "63", "64", "65050022", "68", "69", "70", "72", "73", "74", "75", "76", "78", "79", "80", "81",
    "82", "83", "8484", "90049020", "90183", "902000", "94",
]


def ncm_aceito(ncm: str, prefixes: Sequence[str]) -> bool:
    if not ncm:
        return False
    return any(prefix and ncm.startswith(prefix) for prefix in prefixes)


def filter_by_ncm(itens: Iterable[ItemNota], prefixes: Sequence[str]) -> List[ItemNota]:
    """Itens cujo NCM comeca com algum dos prefixos. Lista vazia nao libera nada."""

    prefixes = list(prefixes)
    return [item for item in itens if ncm_aceito(item.ncm, prefixes)]


def load_prefixes(path: Path) -> List[str]:
    """Le NCMs permitidos (virgula ou quebra de linha). Substitui a lista padrao."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"Nao foi possivel ler a lista de NCMs: {exc}") from exc
    return split_prefixes(text)
