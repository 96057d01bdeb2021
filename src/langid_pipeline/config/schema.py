"""Pydantic v2 configuration models for the language identification pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


class LanguageSourceDef(BaseModel):
    """Where a language's word list lives and how to read it."""

    code: str
    name: str
    path: Path
    alphabet: str | None = None
    encoding: str = "utf-8"


class DatasetConfig(BaseModel):
    seed: int = 13
    max_word_length: int | None = None
    coverage: float | None = None

    @field_validator("coverage")
    @classmethod
    def _coverage_in_range(cls, v: float | None) -> float | None:
        if v is not None and not 0.0 < v <= 1.0:
            raise ValueError(f"coverage ({v}) must be in (0, 1]")
        return v


class TrainingConfig(BaseModel):
    learning_rate: float = Field(0.1, gt=0)
    regularization: float = Field(0.0, ge=0)
    iterations: int = Field(1000, gt=0)
    batch_size: int = Field(1, gt=0)
    progress_every: int = Field(10, ge=0)


class SplitConfig(BaseModel):
    fractions: list[float] = Field(default_factory=lambda: [0.6, 0.2, 0.2])
    names: list[str] = Field(default_factory=lambda: ["train", "cv", "test"])
    shuffle: bool = True

    @model_validator(mode="after")
    def _names_match_fractions(self) -> SplitConfig:
        if len(self.fractions) != len(self.names):
            raise ValueError(
                f"Split fractions ({len(self.fractions)}) and names "
                f"({len(self.names)}) must match"
            )
        return self


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration."""

    languages: list[LanguageSourceDef] = Field(default_factory=list)
    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    split: SplitConfig = Field(default_factory=SplitConfig)
    staging_dir: Path = Path("staging")
    classifier_slots: int = Field(10, gt=0)
    log_level: str = "INFO"
    trace_batches: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"unknown log level: {v!r}")
        return v.upper()

    def language_source(self, code: str) -> LanguageSourceDef | None:
        for source in self.languages:
            if source.code == code:
                return source
        return None
