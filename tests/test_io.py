"""Tests for YAML IO helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from hostsmith.exceptions import ConfigError
from hostsmith.io import load_yaml_mapping


def test_load_yaml_mapping_reads_mapping(tmp_path: Path) -> None:
    path = tmp_path / "host.yaml"
    path.write_text("class: darwin\nspecial_args:\n  user: me\n", encoding="utf-8")

    assert load_yaml_mapping(path) == {"class": "darwin", "special_args": {"user": "me"}}


def test_load_yaml_mapping_treats_empty_document_as_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("# nothing here\n", encoding="utf-8")

    assert load_yaml_mapping(path) == {}


@pytest.mark.parametrize(
    ("content", "expected_match"),
    [
        ("[1, 2\n", "Invalid YAML"),
        ("just a string\n", "must be a YAML mapping"),
    ],
    ids=["invalid-yaml", "scalar-document"],
)
def test_load_yaml_mapping_rejects_bad_documents(tmp_path: Path, content: str, expected_match: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=expected_match):
        load_yaml_mapping(path)


def test_load_yaml_mapping_wraps_read_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read"):
        load_yaml_mapping(tmp_path / "missing.yaml")
