from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

NFE_NS = "http://www.portalfiscal.inf.br/nfe"
CHAVE = "35200114200166000187550010000000046550010000"

PROD_TAGS = [
    "cProd", "cEAN", "xProd", "NCM", "CEST", "indEscala", "CFOP", "uCom", "qCom",
    "vUnCom", "vProd", "cEANTrib", "uTrib", "qTrib", "vUnTrib", "indTot",
]


def produto(**overrides: str) -> Dict[str, str]:
    values = {
        "cProd": "001",
        "cEAN": "07891234567895",
        "xProd": "ALCOOL ETILICO",
        "NCM": "29051100",
        "CEST": "0100100",
        "indEscala": "S",
        "CFOP": "5102",
        "uCom": "UN",
        "qCom": "10.0000",
        "vUnCom": "2.5000000000",
        "vProd": "25.00",
        "cEANTrib": "07891234567895",
        "uTrib": "UN",
        "qTrib": "10.0000",
        "vUnTrib": "2.5000000000",
        "indTot": "1",
    }
    values.update(overrides)
    return values


def build_nfe(
    produtos: List[Optional[Dict[str, str]]],
    chave: Optional[str] = CHAVE,
    dh_emi: Optional[str] = "2020-01-14T10:30:00-03:00",
    prefix: str = "",
) -> str:
    """Monta um nfeProc minimo. ``None`` em ``produtos`` gera um det sem prod."""

    p = f"{prefix}:" if prefix else ""
    xmlns = f'xmlns:{prefix}="{NFE_NS}"' if prefix else f'xmlns="{NFE_NS}"'
    id_attr = f' Id="NFe{chave}"' if chave is not None else ""
    ide = f"<{p}ide><{p}nNF>46</{p}nNF>"
    if dh_emi is not None:
        ide += f"<{p}dhEmi>{dh_emi}</{p}dhEmi>"
    ide += f"</{p}ide>"

    dets = []
    for n, prod in enumerate(produtos, start=1):
        if prod is None:
            dets.append(f'<{p}det nItem="{n}"><{p}imposto/></{p}det>')
            continue
        campos = "".join(f"<{p}{tag}>{value}</{p}{tag}>" for tag, value in prod.items())
        dets.append(f'<{p}det nItem="{n}"><{p}prod>{campos}</{p}prod></{p}det>')

    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<{p}nfeProc {xmlns} versao=\"4.00\"><{p}NFe>"
        f"<{p}infNFe{id_attr} versao=\"4.00\">{ide}{''.join(dets)}</{p}infNFe>"
        f"</{p}NFe></{p}nfeProc>"
    )


@pytest.fixture
def write_xml(tmp_path):
    def _write(nome: str, content: str) -> Path:
        path = tmp_path / nome
        path.write_text(content, encoding="utf-8")
        return path

    return _write
