from __future__ import annotations

from pathlib import Path

import pytest

from weavecarbon.config.loader import ConfigError, load_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.products_table == "products"
    assert cfg.check_existing_skus is True
    assert cfg.block_on_errors is False
    assert cfg.sheet_name is None
    assert cfg.database.host == "localhost"
    assert cfg.database.port == 5432
    assert cfg.database.dsn is None


def test_load_config_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "import.yml"
    path.write_text("source_directory: ./incoming\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.source_directory == "./incoming"
    assert cfg.products_table == "products"
    assert cfg.check_existing_skus is True
    assert cfg.block_on_errors is False
    assert cfg.database.host is None


def test_load_config_null_database(temp_workdir: Path):
    path = temp_workdir / "config" / "import.yml"
    path.write_text("source_directory: ./data\nsheet_name: Dữ liệu sản phẩm\ndatabase:\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.sheet_name == "Dữ liệu sản phẩm"
    assert cfg.database.user is None


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("source_directory: ./data\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)
    assert "required property" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_wrong_type(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("block_on_errors: false", "block_on_errors: sometimes")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


@pytest.mark.parametrize("table", ["products; DROP TABLE x", "1products", "a.b.c"])
def test_load_config_bad_table_name(write_config: Path, table: str):
    text = write_config.read_text(encoding="utf-8").replace(
        "products_table: products", f'products_table: "{table}"'
    )
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_port_out_of_range(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("port: 5432", "port: 70000")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)
