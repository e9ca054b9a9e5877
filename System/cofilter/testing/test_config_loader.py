import json
from pathlib import Path

import pytest

from System.cofilter.config_loader import DEFAULT_RUN_CONFIG, load_config, load_run_config, resolve_path


def test_load_yaml_json_toml(tmp_path):
    (tmp_path / "a.yml").write_text("metric: tanimoto\ntop_n: 5\n", encoding="utf-8")
    (tmp_path / "a.json").write_text(json.dumps({"metric": "tanimoto", "top_n": 5}), encoding="utf-8")
    (tmp_path / "a.toml").write_text('metric = "tanimoto"\ntop_n = 5\n', encoding="utf-8")
    for name in ["a.yml", "a.json", "a.toml"]:
        assert load_config(tmp_path / name) == {"metric": "tanimoto", "top_n": 5}


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yml")
    (tmp_path / "a.ini").write_text("[x]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(tmp_path / "a.ini")


def test_resolve_path_relative_to_config(tmp_path):
    config_path = tmp_path / "configs" / "run.yml"
    assert resolve_path("../data/x.csv", config_path) == (tmp_path / "data" / "x.csv").resolve()
    assert resolve_path(str(tmp_path / "abs.csv"), config_path) == tmp_path / "abs.csv"


def test_load_run_config_fills_defaults(tmp_path):
    path = tmp_path / "run.yml"
    path.write_text("data_path: ratings.csv\nmetric: euclidean\n", encoding="utf-8")
    cfg = load_run_config(path)
    assert cfg["metric"] == "euclidean"
    assert cfg["top_n"] == DEFAULT_RUN_CONFIG["top_n"]
    assert Path(cfg["data_path"]) == (tmp_path / "ratings.csv").resolve()


@pytest.mark.parametrize("body", [
    "metric: pearson\n",
    "data_path: x.csv\ntop_n: -1\n",
    "data_path: x.csv\ntop_n: three\n",
    "data_path: x.csv\nqueries: Toby\n",
])
def test_load_run_config_rejects_invalid(tmp_path, body):
    path = tmp_path / "run.yml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_run_config(path)
