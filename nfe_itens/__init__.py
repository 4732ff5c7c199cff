"""Extracao de itens de NF-e XML com filtro de NCM e exportacao para Excel."""

from .converter import ErroArquivo, ProcessingResult, build_workbook, collect_documents, export_items, process_files
from .errors import MissingElementError, NFeError, ParseError, ReadError
from .filters import DEFAULT_NCM_PREFIXES, filter_by_ncm, load_prefixes
from .parser import ItemNota, parse_nfe, parse_nfe_content

__all__ = [
    "DEFAULT_NCM_PREFIXES",
    "ErroArquivo",
    "ItemNota",
    "MissingElementError",
    "NFeError",
    "ParseError",
    "ProcessingResult",
    "ReadError",
    "build_workbook",
    "collect_documents",
    "export_items",
    "filter_by_ncm",
    "load_prefixes",
    "parse_nfe",
    "parse_nfe_content",
    "process_files",
]
