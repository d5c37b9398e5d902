"""Smoke test for WineRunner CLI.

Run:
  python test/smoke_test.py

This script builds a fake prefix and patches process creation so the CLI can be
exercised end to end without Wine installed.
"""

from __future__ import annotations

import subprocess
import sys
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
sys.path.insert(0, str(SRC_DIR))


CONFIG_YAML = """
prefix:
  library_paths: [/usr/local/lib, /opt/lib]
  esync: true
debug:
  - channel: relay
    enabled: false
"""


def _fake_prefix(tmp: str) -> Path:
    root = Path(tmp) / "prefix"
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "wine").write_text("", encoding="utf-8")
    return root


def _config_file(tmp: str) -> Path:
    path = Path(tmp) / "config.yml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


def test_smoke_readme_debug_order() -> None:
    from WineRunner.cli.ui import cli

    with tempfile.TemporaryDirectory() as tmp:
        root = _fake_prefix(tmp)
        result = CliRunner().invoke(
            cli,
            ["--prefix", str(root), "run", "--start", "--debug", "-all", "--debug", "+seh", "--dry-run", "notepad.exe"],
        )
    assert result.exit_code == 0, result.output
    assert "WINEDEBUG=-all,+seh " in result.output, result.output
    assert "start notepad.exe" in result.output


def test_smoke_dry_run_with_config() -> None:
    from WineRunner.cli.ui import cli

    with tempfile.TemporaryDirectory() as tmp:
        root = _fake_prefix(tmp)
        result = CliRunner().invoke(
            cli,
            [
                "--config",
                str(_config_file(tmp)),
                "--prefix",
                str(root),
                "run",
                "--debug",
                "+seh",
                "--debug",
                "-all",
                "--debug",
                "+relay",
                "--dry-run",
                "notepad.exe",
            ],
        )
    assert result.exit_code == 0, result.output
    assert "WINEDEBUG=-relay,+seh,-all,+relay " in result.output, result.output
    assert "DYLD_FALLBACK_LIBRARY_PATH=/usr/local/lib:/opt/lib" in result.output
    assert "ESYNC=1" in result.output


def test_smoke_run_spawns() -> None:
    from WineRunner.cli.ui import cli

    with tempfile.TemporaryDirectory() as tmp:
        root = _fake_prefix(tmp)
        with patch("WineRunner.services.process.subprocess.Popen", return_value=MagicMock(pid=99)) as popen:
            result = CliRunner().invoke(cli, ["--prefix", str(root), "run", "--debug=-fixme", "game.exe"])
    assert result.exit_code == 0, result.output
    argv = popen.call_args.args[0]
    env = popen.call_args.kwargs["env"]
    assert argv == [str(root / "bin" / "wine"), "game.exe"]
    assert env["WINEDEBUG"] == "-fixme"
    assert env["WINEPREFIX"] == str(root)


def test_smoke_bad_debug_value_aborts() -> None:
    from WineRunner.cli.ui import cli

    with tempfile.TemporaryDirectory() as tmp:
        root = _fake_prefix(tmp)
        with patch("WineRunner.services.process.subprocess.Popen") as popen:
            result = CliRunner().invoke(cli, ["--prefix", str(root), "run", "--debug", "+", "game.exe"])
    assert result.exit_code != 0
    popen.assert_not_called()


def test_smoke_kill_uses_env_prefix() -> None:
    from WineRunner.cli.ui import cli

    completed = subprocess.CompletedProcess([], 1, stdout=b"", stderr=b"")
    with tempfile.TemporaryDirectory() as tmp:
        root = _fake_prefix(tmp)
        with patch("WineRunner.services.process.subprocess.run", return_value=completed) as run:
            result = CliRunner().invoke(cli, ["kill"], env={"WINERUNNER_PREFIX": str(root)})
    assert result.exit_code == 0, result.output
    assert "wineserver exited with 1" in result.output
    assert run.call_args.args[0] == [str(root / "bin" / "wineserver"), "-k"]
    assert run.call_args.kwargs["cwd"] == root


def test_smoke_invalid_prefix_aborts() -> None:
    from WineRunner.cli.ui import cli

    with tempfile.TemporaryDirectory() as tmp:
        result = CliRunner().invoke(cli, ["--prefix", tmp, "kill"])
    assert result.exit_code != 0


def main() -> None:
    test_smoke_readme_debug_order()
    test_smoke_dry_run_with_config()
    test_smoke_run_spawns()
    test_smoke_bad_debug_value_aborts()
    test_smoke_kill_uses_env_prefix()
    test_smoke_invalid_prefix_aborts()
    print("Smoke test passed.")


if __name__ == "__main__":
    main()
