# squad_rotation/io.py
from __future__ import annotations
import io
import yaml

from .models import SolveResult, SquadConfig
from .validation import coerce_config
from .reports import schedule_frame, totals_frame


def load_squad_yaml(path: str) -> SquadConfig:
    with open(path, "r", encoding="utf-8") as f:
        obj = yaml.safe_load(f) or {}
    if not isinstance(obj, dict):
        raise ValueError(f"Squad file {path} must contain a mapping of settings.")
    return coerce_config(obj)


def save_squad_yaml(path: str, cfg: SquadConfig) -> None:
    data = cfg.model_dump(exclude_none=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def schedule_csv_bytes(result: SolveResult) -> bytes:
    buf = io.StringIO()
    schedule_frame(result).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def totals_csv_bytes(result: SolveResult) -> bytes:
    buf = io.StringIO()
    totals_frame(result).to_csv(buf)
    return buf.getvalue().encode("utf-8")
