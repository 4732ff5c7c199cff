"""Extracao em lote de itens de NF-e e exportacao para planilha Excel."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

import pandas as pd

from .config import Settings
from .filters import DEFAULT_NCM_PREFIXES, filter_by_ncm
from .parser import HEADERS, ItemNota, parse_nfe

LOGGER = logging.getLogger("nfe_itens")

SEM_DADOS = "Não há dados para exportar."

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class ErroArquivo:
    arquivo: str
    mensagem: str

    def __str__(self) -> str:
        return f"{self.arquivo}: {self.mensagem}"


@dataclass
class ProcessingResult:
    itens: List[ItemNota] = field(default_factory=list)
    erros: List[ErroArquivo] = field(default_factory=list)
    cancelado: bool = False

    @property
    def status(self) -> str:
        return f"Processamento concluído. {len(self.itens)} itens encontrados."


def collect_documents(source: Path) -> List[Path]:
    """Coleta arquivos XML a partir de arquivo ou pasta."""

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Origem nao encontrada: {source}")

    if source.is_file() and source.suffix.lower() == ".xml":
        return [source]

    if not source.is_dir():
        raise ValueError(f"Formato nao suportado: {source.suffix}")

    documents = sorted(p for p in source.rglob("*") if p.is_file() and p.suffix.lower() == ".xml")
    if not documents:
        raise FileNotFoundError("Nenhum XML encontrado.")
    return documents


def format_progress(index: int, total: int, nome: str) -> str:
    return f"Processando {index} de {total}: {nome}"


def process_files(
    documentos: Sequence[Path],
    on_progress: Optional[ProgressCallback] = None,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> ProcessingResult:
    """Processa os XMLs um a um, na ordem recebida.

    Um arquivo com falha vira um ErroArquivo e o lote segue. ``should_cancel``
    e consultado entre arquivos.
    """

    result = ProcessingResult()
    total = len(documentos)

    for index, xml_path in enumerate(documentos, start=1):
        if should_cancel is not None and should_cancel():
            LOGGER.info("Processamento cancelado antes de %s", xml_path.name)
            result.cancelado = True
            break
        if on_progress is not None:
            on_progress(index, total, xml_path.name)
        LOGGER.debug(format_progress(index, total, xml_path.name))
        try:
            itens = parse_nfe(xml_path)
        except Exception as exc:
            LOGGER.error("Falha ao processar %s: %s", xml_path.name, exc)
            result.erros.append(ErroArquivo(arquivo=xml_path.name, mensagem=str(exc)))
            continue
        result.itens.extend(itens)

    LOGGER.info(result.status)
    return result


def items_dataframe(itens: Iterable[ItemNota]) -> pd.DataFrame:
    rows = [item.as_row() for item in itens]
    return pd.DataFrame(rows, columns=HEADERS, dtype=object)


def _force_text_cells(sheet) -> None:
    # openpyxl grava como formula todo texto iniciado por "=".
    for row in sheet.iter_rows(min_row=2):
        for cell in row:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"


def export_items(itens: Sequence[ItemNota], path: Path, sheet_name: str = "Itens") -> Optional[Path]:
    """Grava os itens em ``path``. Sem itens nao grava nada e devolve None."""

    if not itens:
        LOGGER.info(SEM_DADOS)
        return None

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        items_dataframe(itens).to_excel(writer, sheet_name=sheet_name, index=False)
        _force_text_cells(writer.sheets[sheet_name])
    LOGGER.info("Planilha gerada: %s (%d itens)", path, len(itens))
    return path


def build_workbook(
    documentos: Sequence[Path],
    settings: Optional[Settings] = None,
    prefixes: Optional[Sequence[str]] = None,
    filtrar: bool = True,
    dry_run: bool = False,
    on_progress: Optional[ProgressCallback] = None,
) -> dict:
    """Gera as planilhas completa e filtrada a partir de uma lista de XMLs."""

    settings = settings or Settings()
    prefixes = DEFAULT_NCM_PREFIXES if prefixes is None else list(prefixes)

    result = process_files(documentos, on_progress=on_progress)
    status: List[str] = [result.status]
    summary = {
        "itens": result.itens,
        "erros": result.erros,
        "filtrados": None,
        "completo": None,
        "filtrado": None,
        "status": status,
    }
    if dry_run:
        return summary

    output_dir = Path(settings.output_dir)
    summary["completo"] = export_items(
        result.itens, output_dir / settings.arquivo_completo, sheet_name=settings.sheet_name
    )
    if summary["completo"] is None:
        status.append(SEM_DADOS)

    if filtrar:
        filtrados = filter_by_ncm(result.itens, prefixes)
        summary["filtrados"] = filtrados
        summary["filtrado"] = export_items(
            filtrados, output_dir / settings.arquivo_filtrado, sheet_name=settings.sheet_name
        )
        if summary["filtrado"] is None:
            status.append(f"Filtro NCM: {SEM_DADOS}")

    return summary
