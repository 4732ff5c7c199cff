"""Configuracao opcional (TOML) da exportacao."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import tomli

DEFAULT_CONFIG_PATH = Path("nfe_itens.toml")


@dataclass
class Settings:
    output_dir: Path = Path("output")
    arquivo_completo: str = "itens_nfe_completo.xlsx"
    arquivo_filtrado: str = "itens_nfe_filtrado_NCM.xlsx"
    sheet_name: str = "Itens"
    ncm_file: Optional[Path] = None


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomli.loads(path.read_text(encoding="utf-8"))
    except tomli.TOMLDecodeError as exc:
        raise ValueError(f"Configuracao invalida em {path}: {exc}") from exc


def load_settings(path: Optional[Path] = None) -> Settings:
    """Carrega ``[export]`` e ``[filtro]``; sem arquivo usa os padroes."""

    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Arquivo de configuracao {config_path} nao encontrado.")
        return Settings()

    raw = _load_toml(config_path)
    export = raw.get("export", {})
    filtro = raw.get("filtro", {})
    base_dir = config_path.resolve().parent

    def resolve(value: str) -> Path:
        resolved = Path(value)
        if not resolved.is_absolute():
            resolved = base_dir / resolved
        return resolved

    settings = Settings()
    if "output_dir" in export:
        settings.output_dir = resolve(export["output_dir"])
    settings.arquivo_completo = export.get("arquivo_completo", settings.arquivo_completo)
    settings.arquivo_filtrado = export.get("arquivo_filtrado", settings.arquivo_filtrado)
    settings.sheet_name = export.get("sheet_name", settings.sheet_name)
    if filtro.get("ncm_file"):
        settings.ncm_file = resolve(filtro["ncm_file"])
    return settings
