"""Tests for the built-in configuration sources."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from configurant.core.errors import ConfigParseError, FileSystemError
from configurant.core.types import Options
from configurant.sources.argv import ArgvSource, coerce, parse_argv
from configurant.sources.environ import EnvSource
from configurant.sources.file import FileSource
from configurant.sources.loaders import load_file


def _opts(path: Path, **kwargs) -> Options:
    return Options(path=str(path), **kwargs).resolved()


class TestFileSource:
    """Test suite for FileSource."""

    def test_loads_and_merges_files(self, config_dir: Path):
        """All recognised files are merged in filename order."""
        result = FileSource().load(_opts(config_dir))
        assert result == {
            "name": "My App",
            "db": {"host": "localhost", "port": 5432, "user": "admin"},
            "features": ["a", "b"],
            "logging": {"level": "info"},
        }

    def test_ignores_unrecognised_files(self, config_dir: Path):
        files = FileSource().list_files(config_dir)
        assert [p.name for p in files] == ["a.py", "b.json", "c.yaml"]

    def test_python_file_skips_private_names_modules_and_functions(self, config_dir: Path):
        data = load_file(config_dir / "a.py")
        assert set(data) == {"name", "db"}

    def test_later_file_wins(self, tmp_path: Path):
        (tmp_path / "a.json").write_text(json.dumps({"name": "first"}))
        (tmp_path / "b.json").write_text(json.dumps({"name": "second"}))
        assert FileSource().load(_opts(tmp_path)) == {"name": "second"}

    def test_env_overrides_merged(self, config_dir: Path):
        """A same-named file under <path>/<env>/ is merged over the base file."""
        prod = config_dir / "production"
        prod.mkdir()
        (prod / "b.json").write_text(json.dumps({"db": {"user": "prod"}}))
        result = FileSource().load(_opts(config_dir, env="production"))
        assert result["db"] == {"host": "localhost", "port": 5432, "user": "prod"}
        assert result["features"] == ["a", "b"]

    def test_env_without_override_files(self, config_dir: Path):
        base = FileSource().load(_opts(config_dir))
        assert FileSource().load(_opts(config_dir, env="staging")) == base

    def test_env_override_ignored_when_env_unset(self, config_dir: Path):
        prod = config_dir / "production"
        prod.mkdir()
        (prod / "b.json").write_text(json.dumps({"db": {"user": "prod"}}))
        result = FileSource().load(_opts(config_dir))
        assert result["db"]["user"] == "admin"

    def test_namespace_wraps_under_stem(self, config_dir: Path):
        """Namespacing nests each file under its name without extension."""
        result = FileSource().load(_opts(config_dir, namespace=True))
        assert result == {
            "a": {"name": "My App", "db": {"host": "localhost", "port": 5432}},
            "b": {"db": {"user": "admin"}, "features": ["a", "b"]},
            "c": {"logging": {"level": "info"}},
        }
        # wrapped fragment does not contain itself
        assert "a" not in result["a"]

    def test_namespace_applies_after_env_override(self, tmp_path: Path):
        (tmp_path / "db.json").write_text(json.dumps({"host": "localhost"}))
        (tmp_path / "dev").mkdir()
        (tmp_path / "dev" / "db.json").write_text(json.dumps({"host": "dev-db"}))
        result = FileSource().load(_opts(tmp_path, env="dev", namespace=True))
        assert result == {"db": {"host": "dev-db"}}

    def test_ini_sections_nested(self, tmp_path: Path):
        (tmp_path / "app.ini").write_text("[server]\nport = 8080\nhost = 0.0.0.0\n")
        assert FileSource().load(_opts(tmp_path)) == {
            "server": {"port": "8080", "host": "0.0.0.0"}
        }

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path):
        (tmp_path / "empty.yml").write_text("")
        assert FileSource().load(_opts(tmp_path)) == {}

    def test_empty_directory(self, tmp_path: Path):
        assert FileSource().load(_opts(tmp_path)) == {}

    def test_invalid_json_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "bad.json").write_text("{not json")
        with pytest.raises(ConfigParseError, match="bad.json"):
            FileSource().load(_opts(tmp_path))

    def test_invalid_yaml_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "bad.yaml").write_text("invalid: yaml: content: [")
        with pytest.raises(ConfigParseError):
            FileSource().load(_opts(tmp_path))

    def test_failing_python_file_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "boom.py").write_text("raise RuntimeError('boom')\n")
        with pytest.raises(ConfigParseError, match="RuntimeError"):
            FileSource().load(_opts(tmp_path))

    def test_invalid_utf8_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "bad.json").write_bytes(b'{"a": "\xff\xfe"}')
        with pytest.raises(ConfigParseError, match="bad.json"):
            FileSource().load(_opts(tmp_path))

    def test_ini_percent_kept_verbatim(self, tmp_path: Path):
        (tmp_path / "db.ini").write_text("[db]\nurl = postgres://u:p%40host/db\n")
        assert FileSource().load(_opts(tmp_path)) == {
            "db": {"url": "postgres://u:p%40host/db"}
        }

    def test_malformed_ini_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "bad.ini").write_text("no section header\n")
        with pytest.raises(ConfigParseError):
            FileSource().load(_opts(tmp_path))

    def test_python_file_skips_builtin_callables(self, tmp_path: Path):
        (tmp_path / "m.py").write_text("from math import sqrt\nroot = sqrt(4)\n")
        assert load_file(tmp_path / "m.py") == {"root": 2.0}

    def test_python_file_uncopyable_value_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "lock.py").write_text("import threading\nlock = threading.Lock()\n")
        with pytest.raises(ConfigParseError, match="lock.py"):
            FileSource().load(_opts(tmp_path))

    def test_non_mapping_top_level_raises_parse_error(self, tmp_path: Path):
        (tmp_path / "list.json").write_text("[1, 2]")
        with pytest.raises(ConfigParseError, match="mapping"):
            FileSource().load(_opts(tmp_path))

    def test_unlistable_directory_raises_filesystem_error(self, tmp_path: Path):
        not_a_dir = tmp_path / "file.txt"
        not_a_dir.write_text("x")
        with pytest.raises(FileSystemError):
            FileSource().load(_opts(not_a_dir))

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permissions are not enforced for root",
    )
    def test_unreadable_file_raises_filesystem_error(self, tmp_path: Path):
        secret = tmp_path / "secret.json"
        secret.write_text("{}")
        secret.chmod(0o000)
        try:
            with pytest.raises(FileSystemError):
                FileSource().load(_opts(tmp_path))
        finally:
            secret.chmod(0o644)


class TestEnvSource:
    """Test suite for EnvSource."""

    def test_values_stay_strings(self):
        source = EnvSource({"PORT": "8080", "DEBUG": "true"})
        assert source.load(Options()) == {"PORT": "8080", "DEBUG": "true"}

    def test_namespaced_variables_nested(self):
        source = EnvSource({"db.host": "localhost", "db.port": "5432"})
        result = source.load(Options())
        assert result == {"db": {"host": "localhost", "port": "5432"}}
        assert "db.host" not in result

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("CONFIGURANT_TEST_VAR", "hello")
        monkeypatch.setenv("configurant_test.nested", "value")
        result = EnvSource().load(Options())
        assert result["CONFIGURANT_TEST_VAR"] == "hello"
        assert result["configurant_test"] == {"nested": "value"}
        assert "configurant_test.nested" not in result

    def test_snapshot_is_a_copy(self):
        environ = {"A": "1"}
        snapshot = EnvSource(environ).snapshot()
        snapshot["A"] = "2"
        assert environ == {"A": "1"}


class TestParseArgv:
    """Test suite for the minimist-style argument parser."""

    def test_empty(self):
        assert parse_argv([]) == {"_": []}

    def test_key_equals_value(self):
        assert parse_argv(["--name=Foo"]) == {"_": [], "name": "Foo"}

    def test_key_space_value(self):
        assert parse_argv(["--name", "Foo"]) == {"_": [], "name": "Foo"}

    def test_bare_flag(self):
        assert parse_argv(["--debug"]) == {"_": [], "debug": True}

    def test_flag_before_flag(self):
        assert parse_argv(["--debug", "--verbose"]) == {
            "_": [], "debug": True, "verbose": True,
        }

    def test_negated_flag(self):
        assert parse_argv(["--no-cache"]) == {"_": [], "cache": False}

    def test_boolean_values(self):
        assert parse_argv(["--a", "true", "--b", "false"]) == {"_": [], "a": True, "b": False}

    def test_inline_boolean_stays_text(self):
        """Only a separate true/false token becomes a boolean."""
        assert parse_argv(["--a=true", "-b=false"]) == {"_": [], "a": "true", "b": "false"}

    def test_short_flag_attached_number(self):
        assert parse_argv(["-n5"]) == {"_": [], "n": 5}

    def test_short_flags_with_attached_number(self):
        assert parse_argv(["-xn1.5", "rest"]) == {"_": ["rest"], "x": True, "n": 1.5}

    def test_short_flags(self):
        assert parse_argv(["-abc"]) == {"_": [], "a": True, "b": True, "c": True}

    def test_short_flag_with_value(self):
        assert parse_argv(["-xn", "5"]) == {"_": [], "x": True, "n": 5}

    def test_short_flag_equals_value(self):
        assert parse_argv(["-n=5"]) == {"_": [], "n": 5}

    def test_numbers_coerced(self):
        assert parse_argv(["--port", "8080", "--ratio=0.5", "--offset", "-3"]) == {
            "_": [], "port": 8080, "ratio": 0.5, "offset": -3,
        }

    def test_positionals(self):
        assert parse_argv(["serve", "--port", "1", "extra", "7"]) == {
            "_": ["serve", "extra", 7], "port": 1,
        }

    def test_double_dash_stops_parsing(self):
        assert parse_argv(["--a", "1", "--", "--b", "x"]) == {"_": ["--b", "x"], "a": 1}

    def test_repeated_key_collects_list(self):
        assert parse_argv(["--tag", "a", "--tag", "b", "--tag=c"]) == {
            "_": [], "tag": ["a", "b", "c"],
        }

    def test_coerce_leaves_text(self):
        assert coerce("1.2.3") == "1.2.3"
        assert coerce("abc") == "abc"


class TestArgvSource:
    """Test suite for ArgvSource."""

    def test_namespaced_flags_nested(self):
        source = ArgvSource(["--db.host=localhost", "--db.port", "5432", "--debug"])
        assert source.load(Options()) == {
            "_": [],
            "db": {"host": "localhost", "port": 5432},
            "debug": True,
        }

    def test_reads_sys_argv(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["app.py", "--name=Foo", "run"])
        assert ArgvSource().load(Options()) == {"_": ["run"], "name": "Foo"}
