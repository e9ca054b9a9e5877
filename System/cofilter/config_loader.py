"""
Helpers to load run configuration files in YAML, JSON or TOML.

Usage:
    cfg = load_run_config('configs/base_local.yml')
"""
from pathlib import Path
from typing import Any, Dict, Union
import json
import logging
import tomli as tomllib  # type: ignore
import yaml

logger = logging.getLogger(__name__)

DEFAULT_RUN_CONFIG: Dict[str, Any] = {
    "category_column": "category",
    "feature_column": "feature",
    "value_column": "value",
    "metric": "pearson",
    "top_n": 3,
    "include_predictions": False,
    "log_level": "INFO",
    "queries": [],
}

def _suffix(path: Union[str, Path]) -> str:
    return Path(path).suffix.lower()

def load_config(path: Union[str, Path]) -> Dict:
    """Return the configuration dictionary stored in *path*."""
    path = Path(path).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(path)

    ext = _suffix(path)
    if ext in {".yml", ".yaml"}:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
    if ext == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    if ext in {".toml", ".tml"}:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    raise ValueError(f"Unsupported config format: {ext}")

def resolve_path(value: Union[str, Path], config_path: Union[str, Path]) -> Path:
    """Resolve *value* relative to the directory holding *config_path*."""
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return (Path(config_path).expanduser().resolve().parent / candidate).resolve()

def load_run_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a run configuration, fill in defaults and validate it.

    ``data_path`` is required and is returned as an absolute path resolved
    against the config file's directory.

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If data_path is missing or top_n is not a non-negative integer
    """
    raw = load_config(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must contain a mapping, got {type(raw).__name__}")

    unknown = sorted(set(raw) - set(DEFAULT_RUN_CONFIG) - {"data_path"})
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", unknown)

    cfg = {**DEFAULT_RUN_CONFIG, **raw}
    if not cfg.get("data_path"):
        raise ValueError(f"Config {path} must define data_path")
    cfg["data_path"] = str(resolve_path(cfg["data_path"], path))

    top_n = cfg["top_n"]
    if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 0:
        raise ValueError(f"top_n must be a non-negative integer, got {top_n!r}")
    if not isinstance(cfg["queries"], list):
        raise ValueError("queries must be a list of {category: ...} or {feature: ...} entries")
    return cfg
