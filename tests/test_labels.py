from __future__ import annotations

from pathlib import Path

import pytest

from ruuvigw.exceptions import RuuviConfigError
from ruuvigw.labels import LabelMapping


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "names.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_mapping(tmp_path: Path) -> None:
    path = _write(tmp_path, '"AA:BB:CC:DD:EE:FF": "Living Room"\n"11:22:33:44:55:66": Kitchen\n')

    mapping = LabelMapping.load(path)

    assert mapping.lookup("AA:BB:CC:DD:EE:FF") == "Living Room"
    assert mapping.lookup("11:22:33:44:55:66") == "Kitchen"
    assert mapping.lookup("00:00:00:00:00:00") is None
    assert len(mapping) == 2


def test_empty_mapping(tmp_path: Path) -> None:
    assert LabelMapping.load(_write(tmp_path, "{}")).lookup("any-mac") is None


def test_empty_file(tmp_path: Path) -> None:
    assert len(LabelMapping.load(_write(tmp_path, ""))) == 0


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(RuuviConfigError, match="Invalid YAML"):
        LabelMapping.load(_write(tmp_path, "invalid: yaml: content:"))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RuuviConfigError, match="Cannot read"):
        LabelMapping.load(tmp_path / "missing.yaml")


def test_non_mapping_document(tmp_path: Path) -> None:
    with pytest.raises(RuuviConfigError, match="must be a mapping"):
        LabelMapping.load(_write(tmp_path, "- a\n- b\n"))


def test_unquoted_numeric_mac_is_rejected(tmp_path: Path) -> None:
    # YAML 1.1 reads this key as a base-60 integer.
    with pytest.raises(RuuviConfigError, match="quote MAC addresses"):
        LabelMapping.load(_write(tmp_path, "11:22:33:44:55:56: Kitchen\n"))


def test_nested_value_is_rejected() -> None:
    with pytest.raises(RuuviConfigError, match="scalar"):
        LabelMapping.from_document({"AA": {"name": "x"}})


def test_scalar_values_are_coerced() -> None:
    assert LabelMapping.from_document({"AA": 12}).lookup("AA") == "12"


def test_mapping_is_read_only() -> None:
    names = {"AA": "Office"}
    mapping = LabelMapping(names)
    names["AA"] = "Changed"

    assert mapping.lookup("AA") == "Office"
    assert "AA" in mapping
