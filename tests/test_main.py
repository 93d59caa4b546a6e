"""Tests for the javacopts build / probe commands."""

import json
import os
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from javacopts.main import app

runner = CliRunner()

SEP = os.pathsep


def _write_config(root: Path, content: str) -> Path:
    (root / "javacopts.toml").write_text(content, encoding="utf-8")
    return root


class TestBuild:
    def test_classpath_merge(self) -> None:
        result = runner.invoke(
            app,
            ["build", "--no-config", "-cp", "FOO", "-cp", "BAR", "--spec-version", "17", "--json"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["-classpath", "FOO" + SEP + "BAR"]

    def test_release_modern(self) -> None:
        result = runner.invoke(
            app, ["build", "--no-config", "--release", "8", "--spec-version", "17", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["--release", "8"]

    def test_release_legacy(self) -> None:
        result = runner.invoke(
            app, ["build", "--no-config", "--release", "8", "--spec-version", "1.8", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["-source", "8", "-target", "8"]

    def test_release_blocks_source_target(self) -> None:
        result = runner.invoke(
            app,
            [
                "build",
                "--no-config",
                "--release",
                "11",
                "--source",
                "17",
                "--target",
                "17",
                "--spec-version",
                "21",
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["--release", "11"]

    def test_shell_output(self) -> None:
        result = runner.invoke(
            app, ["build", "--no-config", "-cp", "my dir/a.jar", "--source", "11"]
        )
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "-classpath 'my dir/a.jar' -source 11"

    def test_config_then_cli(self, tmp_path: Path) -> None:
        root = _write_config(
            tmp_path,
            '[java]\nspec_version = "17"\n\n'
            '[options]\nclasspath = ["/lib/a.jar"]\nrelease = "11"\nextra = ["-g"]\n',
        )
        result = runner.invoke(
            app, ["build", "--root", str(root), "-cp", "/lib/b.jar", "--release", "17", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == [
            "-g",
            "-classpath",
            "/lib/a.jar" + SEP + "/lib/b.jar",
            "--release",
            "17",
        ]

    def test_spec_version_overrides_config(self, tmp_path: Path) -> None:
        root = _write_config(
            tmp_path, '[java]\nspec_version = "17"\n\n[options]\nrelease = "8"\n'
        )
        result = runner.invoke(
            app, ["build", "--root", str(root), "--spec-version", "1.8", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == ["-source", "8", "-target", "8"]

    def test_bad_config_exits(self, tmp_path: Path) -> None:
        root = _write_config(tmp_path, "[options]\nrelease = true\n")
        result = runner.invoke(app, ["build", "--root", str(root)])
        assert result.exit_code == 1

    def test_bad_config_json(self, tmp_path: Path) -> None:
        root = _write_config(tmp_path, "[options]\nrelease = true\n")
        result = runner.invoke(app, ["build", "--root", str(root), "--json"])
        assert result.exit_code == 1
        assert "release" in json.loads(result.stdout)["error"]

    def test_section_not_a_table_json(self, tmp_path: Path) -> None:
        root = _write_config(tmp_path, "java = 5\n")
        result = runner.invoke(app, ["build", "--root", str(root), "--json"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert json.loads(result.stdout) == {"error": "[java] must be a table, got int"}

    def test_missing_explicit_root_exits(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["build", "--root", str(tmp_path / "nope")])
        assert result.exit_code == 1


class TestProbe:
    def test_probe_json(self, monkeypatch: Any, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("javacopts.main.java_spec_version", lambda java=None: "17")
        result = runner.invoke(app, ["probe", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data == {
            "spec_version": "17",
            "release_supported": True,
            "release_min_version": 9,
        }

    def test_probe_unknown(self, monkeypatch: Any, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("javacopts.main.java_spec_version", lambda java=None: "")
        result = runner.invoke(app, ["probe"])
        assert result.exit_code == 0, result.output
        assert "unknown" in result.stdout
        assert "not supported" in result.stdout

    def test_probe_passes_launcher(self, monkeypatch: Any, tmp_path: Path) -> None:
        seen: list[Any] = []

        def _fake(java: Any = None) -> str:
            seen.append(java)
            return "1.8"

        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("javacopts.main.java_spec_version", _fake)
        result = runner.invoke(app, ["probe", "--java", "/jdk8/bin/java"])
        assert result.exit_code == 0, result.output
        assert seen == ["/jdk8/bin/java"]
        assert "1.8" in result.stdout

    def test_probe_config_spec_version(self, tmp_path: Path) -> None:
        root = _write_config(tmp_path, '[java]\nspec_version = "11"\n')
        result = runner.invoke(app, ["probe", "--root", str(root)])
        assert result.exit_code == 0, result.output
        assert "--release: supported" in result.stdout

    def test_explicit_java_beats_config_spec_version(
        self, monkeypatch: Any, tmp_path: Path
    ) -> None:
        root = _write_config(tmp_path, '[java]\nspec_version = "17"\n')
        monkeypatch.setattr("javacopts.main.java_spec_version", lambda java=None: "1.8")
        result = runner.invoke(
            app, ["probe", "--root", str(root), "--java", "/jdk8/bin/java", "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["spec_version"] == "1.8"
        assert data["release_supported"] is False

    def test_section_not_a_table_exits(self, tmp_path: Path) -> None:
        root = _write_config(tmp_path, "java = 5\n")
        result = runner.invoke(app, ["probe", "--root", str(root), "--json"])
        assert result.exit_code == 1
        assert "must be a table" in json.loads(result.stdout)["error"]
