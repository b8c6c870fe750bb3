"""Unit tests for core.db_config: YAML loading and config file discovery."""

from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from emixdb.core.db_config import DbConfig, find_config_file, load_db_configs
from emixdb.core.errors import ConfigFileError, FatalConfigError

SAMPLE = """
emix:
  db:
    - name: main
      dialect: mysql
      connect: root:secret@tcp(127.0.0.1:3306)/shop
      maxIdleConns: 5
      maxOpenConns: 20
      connMaxLifetime: 3600
    - name: reports
      connect: "sqlite:///reports.db"
"""


def _write(tmp_path: Path, name: str, body: str) -> Path:
    p = tmp_path / name
    p.write_text(body, encoding="utf-8")
    return p


def test_load_db_configs_in_file_order(tmp_path: Path) -> None:
    configs = load_db_configs(_write(tmp_path, "config.yml", SAMPLE))
    assert [c.name for c in configs] == ["main", "reports"]
    main = configs[0]
    assert main.dialect == "mysql"
    assert main.connect == "root:secret@tcp(127.0.0.1:3306)/shop"
    assert main.max_idle_conns == 5
    assert main.max_open_conns == 20
    assert main.conn_max_lifetime == 3600
    assert configs[1].dialect == ""
    assert configs[1].max_idle_conns == 0


def test_to_options_converts_lifetime() -> None:
    op = DbConfig(name="a", connect="x", connMaxLifetime=90, maxIdleConns=2).to_options()
    assert op.conn_max_lifetime == timedelta(seconds=90)
    assert op.max_idle_conns == 2
    assert op.connect == "x"


def test_db_config_accepts_field_names() -> None:
    cfg = DbConfig(name="a", max_open_conns=4)
    assert cfg.max_open_conns == 4


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigFileError) as exc:
        load_db_configs(tmp_path / "nope.yml")
    assert exc.value.path == tmp_path / "nope.yml"
    assert isinstance(exc.value, FatalConfigError)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    p = _write(tmp_path, "config.yml", "emix: [unclosed\n")
    with pytest.raises(ConfigFileError, match="invalid YAML"):
        load_db_configs(p)


def test_schema_mismatch_raises(tmp_path: Path) -> None:
    p = _write(tmp_path, "config.yml", "emix:\n  db:\n    - name: a\n      maxIdleConns: lots\n")
    with pytest.raises(ConfigFileError, match="invalid db config"):
        load_db_configs(p)


def test_non_mapping_document_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigFileError, match="mapping"):
        load_db_configs(_write(tmp_path, "config.yml", "- just\n- a list\n"))


@pytest.mark.parametrize(
    "body",
    ["", "other: 1\n", "emix:\n", "emix:\n  db:\n"],
)
def test_no_db_section_yields_empty(tmp_path: Path, body: str) -> None:
    assert load_db_configs(_write(tmp_path, "config.yml", body)) == []


def test_find_config_file_prefers_yml(tmp_path: Path) -> None:
    _write(tmp_path, "config.yaml", SAMPLE)
    assert find_config_file(base_dir=tmp_path) == tmp_path / "config.yaml"
    _write(tmp_path, "config.yml", SAMPLE)
    assert find_config_file(base_dir=tmp_path) == tmp_path / "config.yml"


def test_find_config_file_none(tmp_path: Path) -> None:
    assert find_config_file(base_dir=tmp_path) is None


def test_find_config_file_custom_candidates(tmp_path: Path) -> None:
    _write(tmp_path, "db.yml", SAMPLE)
    assert find_config_file(["db.yml"], base_dir=tmp_path) == tmp_path / "db.yml"
    with patch("emixdb.core.db_config.settings") as m:
        m.CONFIG_FILES = ["db.yml"]
        assert find_config_file(base_dir=tmp_path) == tmp_path / "db.yml"


def test_find_config_file_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "config.yml", SAMPLE)
    assert find_config_file() == tmp_path / "config.yml"
