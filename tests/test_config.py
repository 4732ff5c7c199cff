from pathlib import Path

import pytest

from nfe_itens.config import Settings, load_settings


def test_sem_arquivo_usa_padroes(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == Settings()
    assert settings.arquivo_completo == "itens_nfe_completo.xlsx"
    assert settings.arquivo_filtrado == "itens_nfe_filtrado_NCM.xlsx"


def test_arquivo_informado_inexistente(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nfe_itens.toml")


def test_carrega_toml(tmp_path):
    path = tmp_path / "nfe_itens.toml"
    path.write_text(
        '[export]\noutput_dir = "saida"\nsheet_name = "Planilha"\n\n[filtro]\nncm_file = "ncms.txt"\n',
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.output_dir == tmp_path.resolve() / "saida"
    assert settings.sheet_name == "Planilha"
    assert settings.ncm_file == tmp_path.resolve() / "ncms.txt"
    assert settings.arquivo_completo == "itens_nfe_completo.xlsx"


def test_toml_invalido(tmp_path):
    path = tmp_path / "nfe_itens.toml"
    path.write_text("[export\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_caminho_absoluto_preservado(tmp_path):
    destino = tmp_path / "abs"
    path = tmp_path / "cfg.toml"
    path.write_text(f"[export]\noutput_dir = '{destino.as_posix()}'\n", encoding="utf-8")
    assert load_settings(path).output_dir == Path(destino.as_posix())
