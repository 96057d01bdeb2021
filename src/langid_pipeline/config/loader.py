"""Load and validate pipeline configuration from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from .schema import PipelineConfig


def load_config(path: Path | str) -> PipelineConfig:
    """Read a YAML file and return a validated PipelineConfig.

    Relative language paths are resolved to absolute paths against the config
    file's directory.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    cfg = PipelineConfig.model_validate(raw)
    for source in cfg.languages:
        if not source.path.is_absolute():
            source.path = (path.parent / source.path).resolve()
    return cfg
