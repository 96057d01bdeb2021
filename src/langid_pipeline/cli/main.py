"""Main Typer application for dataset preparation."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="langid-pipeline",
    help="Word/language dataset preparation for letter-based language identification.",
    no_args_is_help=True,
)


@app.command()
def show_languages(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
) -> None:
    """Load every configured language and report its size."""
    from .languages_cmd import run_show_languages

    run_show_languages(config)


@app.command()
def build_dataset(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
    output: str = typer.Option(
        None, "--output", "-o", help="Override output JSONL path"
    ),
    seed: int = typer.Option(None, "--seed", "-s", help="Override dataset seed"),
) -> None:
    """Build the seeded, de-duplicated dataset and write it as JSONL."""
    from .dataset_cmd import run_build_dataset

    run_build_dataset(config, output, seed)


@app.command()
def split_dataset(
    config: str = typer.Option(..., "--config", "-c", help="Path to config YAML"),
    output_dir: str = typer.Option(
        None, "--output-dir", "-o", help="Override split output directory"
    ),
) -> None:
    """Build the dataset and split it into one JSONL file per configured split."""
    from .dataset_cmd import run_split_dataset

    run_split_dataset(config, output_dir)


if __name__ == "__main__":
    app()
