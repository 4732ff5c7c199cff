"""Parser de itens de NF-e XML."""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import List, Tuple, Union

from lxml import etree

from .errors import MissingElementError, ParseError, ReadError
from .utils import format_emissao, normalise_key, sanitize_xml

LOGGER = logging.getLogger("nfe_itens")

NFE_NS = "http://www.portalfiscal.inf.br/nfe"
NS = {"nfe": NFE_NS}


@dataclass
class ItemNota:
    chave: str = ""
    data_emissao: str = ""
    codigo_produto: str = ""
    ean: str = ""
    produto: str = ""
    ncm: str = ""
    cest: str = ""
    ind_escala: str = ""
    cfop: str = ""
    unidade_comercial: str = ""
    quantidade_comercial: str = ""
    valor_unitario_comercial: str = ""
    valor_produto: str = ""
    ean_tributavel: str = ""
    unidade_tributavel: str = ""
    quantidade_tributavel: str = ""
    valor_unitario_tributavel: str = ""
    indicador_total: str = ""

    def as_row(self) -> Tuple[str, ...]:
        return astuple(self)


# Cabecalhos da planilha, na ordem dos campos de ItemNota.
COLUMNS: List[Tuple[str, str]] = [
    ("chave", "Chave"),
    ("data_emissao", "Data Emissão"),
    ("codigo_produto", "Código Produto"),
    ("ean", "EAN"),
    ("produto", "Produto"),
    ("ncm", "NCM"),
    ("cest", "CEST"),
    ("ind_escala", "Ind. Escala"),
    ("cfop", "CFOP"),
    ("unidade_comercial", "Unidade Comercial"),
    ("quantidade_comercial", "Quantidade Comercial"),
    ("valor_unitario_comercial", "Valor Unitário Comercial"),
    ("valor_produto", "Valor Produto"),
    ("ean_tributavel", "EAN Tributável"),
    ("unidade_tributavel", "Unidade Tributável"),
    ("quantidade_tributavel", "Quantidade Tributável"),
    ("valor_unitario_tributavel", "Valor Unitário Tributável"),
    ("indicador_total", "Indicador Total"),
]

HEADERS = [header for _, header in COLUMNS]

PRODUCT_FIELDS: List[Tuple[str, str]] = [
    ("codigo_produto", "cProd"),
    ("ean", "cEAN"),
    ("produto", "xProd"),
    ("ncm", "NCM"),
    ("cest", "CEST"),
    ("ind_escala", "indEscala"),
    ("cfop", "CFOP"),
    ("unidade_comercial", "uCom"),
    ("quantidade_comercial", "qCom"),
    ("valor_unitario_comercial", "vUnCom"),
    ("valor_produto", "vProd"),
    ("ean_tributavel", "cEANTrib"),
    ("unidade_tributavel", "uTrib"),
    ("quantidade_tributavel", "qTrib"),
    ("valor_unitario_tributavel", "vUnTrib"),
    ("indicador_total", "indTot"),
]


def _first(node, tag: str):
    """Primeiro descendente ``tag`` no namespace da NF-e, ou None."""

    if node is None:
        return None
    return node.find(f".//nfe:{tag}", namespaces=NS)


def _text(node, tag: str) -> str:
    element = _first(node, tag)
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


def _xml_parser() -> etree.XMLParser:
    # O conteudo ja chega decodificado; a declaracao de encoding do XML e ignorada.
    return etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)


def parse_nfe_content(content: Union[str, bytes]) -> List[ItemNota]:
    """Extrai um ItemNota por ``det`` com ``prod`` de um documento NF-e."""

    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    sanitized = sanitize_xml(content)

    try:
        root = etree.fromstring(sanitized.encode("utf-8"), parser=_xml_parser())
    except etree.XMLSyntaxError as exc:
        raise ParseError(f"Erro de parse do XML: {exc}") from exc

    inf = next(root.iter(f"{{{NFE_NS}}}infNFe"), None)
    if inf is None:
        raise MissingElementError("Tag <infNFe> nao encontrada.")

    chave = normalise_key(inf.get("Id"))
    data_emissao = format_emissao(_text(_first(inf, "ide"), "dhEmi"))

    itens: List[ItemNota] = []
    for det in inf.iterfind(".//nfe:det", namespaces=NS):
        prod = _first(det, "prod")
        if prod is None:
            LOGGER.debug("Item %s sem <prod> ignorado (chave %s)", det.get("nItem", "?"), chave)
            continue
        values = {name: _text(prod, tag) for name, tag in PRODUCT_FIELDS}
        itens.append(ItemNota(chave=chave, data_emissao=data_emissao, **values))
    return itens


def read_xml(xml_path: Path) -> str:
    try:
        raw = Path(xml_path).read_bytes()
    except OSError as exc:
        raise ReadError(f"Nao foi possivel ler o arquivo: {exc}") from exc
    return raw.decode("utf-8", errors="replace")


def parse_nfe(xml_path: Path) -> List[ItemNota]:
    return parse_nfe_content(read_xml(xml_path))
