# nametag/config.py

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from typing import Any, Dict

DEFAULT_CONFIG_PATH = "configs/nametag.yaml"


@dataclass
class CorpusConfig:
    encoding: str = "utf-8"


@dataclass
class TrainerConfig:
    language: str = "en"
    skip_alpha_numerics: bool = False


@dataclass
class Config:
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    trainer: TrainerConfig = field(default_factory=TrainerConfig)


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def config_from_dict(cfg: Dict[str, Any] | None) -> Config:
    """
    Build a Config from an already parsed mapping. Missing sections and
    keys fall back to the dataclass defaults.
    """
    cfg = cfg or {}

    corpus_cfg = cfg.get("corpus") or {}
    trainer_cfg = cfg.get("trainer") or {}

    defaults = TrainerConfig()
    trainer = TrainerConfig(
        language=trainer_cfg.get("language", defaults.language),
        skip_alpha_numerics=_as_bool(
            trainer_cfg.get("skip_alpha_numerics"), defaults.skip_alpha_numerics
        ),
    )

    return Config(
        corpus=CorpusConfig(encoding=corpus_cfg.get("encoding", "utf-8")),
        trainer=trainer,
    )


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    return config_from_dict(cfg)
