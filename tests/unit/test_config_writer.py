"""Unit tests for ConfigWriter."""

import json
import logging

import pytest

from tsp.logic.scaffold.services.config_writer import ConfigWriter, fill_if_absent


class TestFillIfAbsent:
    """Test the fill-if-absent policy."""

    def test_existing_values_preserved(self):
        scripts = {"build": "custom-build", "dev": ""}
        changed = fill_if_absent(scripts, {"build": "next build", "dev": "next dev", "start": "next start"})

        assert scripts == {"build": "custom-build", "dev": "next dev", "start": "next start"}
        assert changed == ["dev", "start"]

    def test_nothing_to_fill(self):
        assert fill_if_absent({"a": 1}, {"a": 2}) == []


class TestConfigWriter:
    """Test JSON and text file handling."""

    def test_fill_json_section(self, temp_dir):
        (temp_dir / "package.json").write_text(json.dumps({"name": "x", "scripts": {"build": "custom-build"}}))
        writer = ConfigWriter(temp_dir)

        changed = writer.fill_json("package.json", {"build": "next build", "dev": "next dev"}, section="scripts")

        data = json.loads((temp_dir / "package.json").read_text())
        assert changed == ["dev"]
        assert data["scripts"] == {"build": "custom-build", "dev": "next dev"}
        assert data["name"] == "x"

    def test_fill_json_creates_missing_section(self, temp_dir):
        (temp_dir / "package.json").write_text("{}")
        ConfigWriter(temp_dir).fill_json("package.json", {"test": "jest"}, section="scripts")
        assert json.loads((temp_dir / "package.json").read_text()) == {"scripts": {"test": "jest"}}

    def test_fill_json_rejects_non_object_section(self, temp_dir):
        (temp_dir / "package.json").write_text(json.dumps({"scripts": ["build"]}))
        with pytest.raises(ValueError, match="not an object"):
            ConfigWriter(temp_dir).fill_json("package.json", {"test": "jest"}, section="scripts")

    def test_fill_json_unchanged_file_not_rewritten(self, temp_dir):
        original = '{"extends": "astro/tsconfigs/strict"}'
        (temp_dir / "tsconfig.json").write_text(original)

        changed = ConfigWriter(temp_dir).fill_json("tsconfig.json", {"extends": "astro/tsconfigs/base"})

        assert changed == []
        assert (temp_dir / "tsconfig.json").read_text() == original

    def test_fill_json_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            ConfigWriter(temp_dir).fill_json("package.json", {"test": "jest"})

    def test_read_json_rejects_non_object(self, temp_dir):
        (temp_dir / "package.json").write_text("[]")
        with pytest.raises(ValueError):
            ConfigWriter(temp_dir).read_json("package.json")

    def test_write_json_format(self, temp_dir):
        ConfigWriter(temp_dir).write_json("nested/config.json", {"a": 1})
        assert (temp_dir / "nested" / "config.json").read_text() == '{\n  "a": 1\n}\n'

    def test_ensure_json(self, temp_dir):
        writer = ConfigWriter(temp_dir)
        assert writer.ensure_json("jest.config.json", {"preset": "ts-jest"}) is True
        assert writer.ensure_json("jest.config.json", {"preset": "other"}) is False
        assert writer.read_json("jest.config.json") == {"preset": "ts-jest"}

    def test_ensure_json_protected_warns(self, temp_dir, caplog):
        (temp_dir / "jest.config.json").write_text("{}")

        with caplog.at_level(logging.WARNING):
            created = ConfigWriter(temp_dir).ensure_json("jest.config.json", {"preset": "ts-jest"}, protect=True)

        assert created is False
        assert 'Abort modification of "jest.config.json", already exists!' in caplog.text
        assert (temp_dir / "jest.config.json").read_text() == "{}"

    def test_write_text_if_absent_creates_parents(self, temp_dir):
        writer = ConfigWriter(temp_dir)
        assert writer.write_text_if_absent("src/pages/index.astro", "<h1/>") is True
        assert (temp_dir / "src" / "pages" / "index.astro").read_text() == "<h1/>"

    def test_write_text_if_absent_keeps_existing(self, temp_dir, caplog):
        (temp_dir / "astro.config.mjs").write_text("custom")

        with caplog.at_level(logging.WARNING):
            written = ConfigWriter(temp_dir).write_text_if_absent("astro.config.mjs", "default", protect=True)

        assert written is False
        assert (temp_dir / "astro.config.mjs").read_text() == "custom"
        assert "already exists" in caplog.text

    def test_ensure_directory(self, temp_dir):
        writer = ConfigWriter(temp_dir / "a" / "b")
        assert writer.ensure_directory().is_dir()
        assert writer.ensure_directory("src").is_dir()

    def test_exists_returns_first_match(self, temp_dir):
        (temp_dir / "eslint.config.js").write_text("")
        (temp_dir / ".eslintrc.js").write_text("")
        writer = ConfigWriter(temp_dir)
        assert writer.exists(".eslintrc.json", ".eslintrc.js", "eslint.config.js") == ".eslintrc.js"
        assert writer.exists(".prettierrc") is None
