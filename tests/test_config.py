"""Тесты загрузки данных и партиалов."""

import io
import textwrap
from pathlib import Path

import pytest

from stache.config import load_data, load_partials, read_template
from stache.errors import ConfigError


def write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


class TestLoadData:

    def test_yaml(self, tmp_path: Path):
        path = write(tmp_path / "data.yaml", """
            title: Report
            items:
              - a
              - b
        """)

        assert load_data(path) == {"title": "Report", "items": ["a", "b"]}

    def test_json(self, tmp_path: Path):
        path = write(tmp_path / "data.json", '{"flag": true, "n": 3}')

        assert load_data(path) == {"flag": True, "n": 3}

    def test_empty_document(self, tmp_path: Path):
        assert load_data(write(tmp_path / "empty.yaml", "")) == {}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_data(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = write(tmp_path / "bad.yaml", "a: [1, 2\n")

        with pytest.raises(ConfigError):
            load_data(path)


class TestLoadPartials:

    def test_mapping(self, tmp_path: Path):
        path = write(tmp_path / "partials.yaml", """
            header: "<h1>{{title}}</h1>"
            row: "<li>{{this}}</li>"
        """)

        assert load_partials(path) == {
            "header": "<h1>{{title}}</h1>",
            "row": "<li>{{this}}</li>",
        }

    def test_not_a_mapping(self, tmp_path: Path):
        path = write(tmp_path / "partials.yaml", "- a\n- b\n")

        with pytest.raises(ConfigError):
            load_partials(path)

    def test_non_string_value(self, tmp_path: Path):
        path = write(tmp_path / "partials.yaml", "row: 42\n")

        with pytest.raises(ConfigError):
            load_partials(path)


class TestReadTemplate:

    def test_file(self, tmp_path: Path):
        path = write(tmp_path / "t.hbs", "Hi {{name}}")

        assert read_template(str(path)) == "Hi {{name}}"

    def test_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))

        assert read_template("-") == "from stdin"
