"""Interface de linha de comando para extrair itens de NF-e XML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from nfe_itens.config import load_settings
from nfe_itens.converter import build_workbook, collect_documents, format_progress, items_dataframe
from nfe_itens.filters import DEFAULT_NCM_PREFIXES, load_prefixes
from nfe_itens.utils import split_prefixes

app = typer.Typer(add_completion=False, help="Extrai itens de NF-e XML para planilha Excel.")


def _progress(index: int, total: int, nome: str) -> None:
    typer.echo(format_progress(index, total, nome))


@app.command()
def main(
    input: Path = typer.Option(..., "--input", "-i", help="Arquivo XML ou pasta com XMLs."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Diretorio de destino."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Arquivo de configuracao TOML."),
    ncm_file: Optional[Path] = typer.Option(None, "--ncm-file", help="Lista .txt de prefixos NCM permitidos."),
    ncm: Optional[str] = typer.Option(None, "--ncm", help="Prefixos NCM separados por virgula."),
    sem_filtro: bool = typer.Option(False, "--sem-filtro", help="Nao gera a planilha filtrada."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Apenas processa os arquivos."),
    preview: int = typer.Option(0, "--preview", min=0, help="Mostra os primeiros N itens."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs detalhados."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s | %(message)s",
    )

    try:
        settings = load_settings(config)
        if output is not None:
            settings.output_dir = output
        if ncm is not None:
            prefixes = split_prefixes(ncm)
        elif ncm_file or settings.ncm_file:
            prefixes = load_prefixes(ncm_file or settings.ncm_file)
        else:
            prefixes = DEFAULT_NCM_PREFIXES
        docs = collect_documents(input)
    except Exception as exc:
        typer.echo(f"[ERRO] {exc}")
        raise typer.Exit(code=1) from exc

    result = build_workbook(
        docs,
        settings=settings,
        prefixes=prefixes,
        filtrar=not sem_filtro,
        dry_run=dry_run,
        on_progress=_progress,
    )

    for message in result["status"]:
        typer.echo(f"[OK] {message}")
    if result["completo"]:
        typer.echo(f" - Excel completo: {result['completo']}")
    if result["filtrado"]:
        typer.echo(f" - Excel filtrado ({len(result['filtrados'])} itens): {result['filtrado']}")

    if preview and result["itens"]:
        typer.echo(items_dataframe(result["itens"][:preview]).to_string(index=False))

    if result["erros"]:
        typer.echo("Erros:")
        for erro in result["erros"]:
            typer.echo(f"  - {erro}")


if __name__ == "__main__":
    app()
