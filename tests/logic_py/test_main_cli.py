from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pytest

from boxgrade import main as main_cli
from boxgrade.cli import config_overrides
from boxgrade.config import Config
from boxgrade.orchestrator import RunReport
from boxgrade.status import VagrantBox


def _args(tmp_path: Path, **overrides) -> argparse.Namespace:
    values = {
        "config": tmp_path / "config.toml",
        "directories": None,
        "yes": False,
        "no_power_on": False,
        "dry_run": False,
        "verbose": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


def test_parse_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BOXGRADE_CONFIG", str(tmp_path / "boxgrade.toml"))
    args = main_cli.parse_args([])
    assert args.config == tmp_path / "boxgrade.toml"
    assert args.directories is None
    assert args.yes is False
    assert args.no_power_on is False
    assert args.dry_run is False
    assert args.verbose is False


def test_parse_repeated_directories():
    args = main_cli.parse_args(["-d", "/vm/a", "--directory", "/vm/b", "-y", "--no-power-on", "-n"])
    assert args.directories == ["/vm/a", "/vm/b"]
    assert args.yes is True
    assert args.no_power_on is True
    assert args.dry_run is True


def test_config_overrides_leave_unset_flags_alone(tmp_path: Path):
    assert config_overrides(_args(tmp_path)) == {
        "directories": None,
        "power_on": None,
        "assume_yes": None,
    }


def test_config_overrides_from_flags(tmp_path: Path):
    args = _args(tmp_path, directories=["/vm/a"], yes=True, no_power_on=True)
    assert config_overrides(args) == {
        "directories": ["/vm/a"],
        "power_on": False,
        "assume_yes": True,
    }


def test_main_runs_boxes_with_merged_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    config_file = tmp_path / "config.toml"
    config_file.write_text('[vagrant]\ndirectories = ["/vm/from-file"]\n', encoding="utf-8")
    args = _args(tmp_path, config=config_file, yes=True, dry_run=True)
    called: dict[str, object] = {}

    def fake_run(vagrant, config: Config) -> RunReport:
        called.update({"path": vagrant.path, "dry_run": vagrant.dry_run, "config": config})
        return RunReport(upgraded=[VagrantBox("default", "/vm/from-file")])

    monkeypatch.setattr(main_cli, "parse_args", lambda: args)
    monkeypatch.setattr(main_cli, "configure_logging", lambda _verbose: None)
    monkeypatch.setattr(main_cli, "find_vagrant", lambda: "/opt/bin/vagrant")
    monkeypatch.setattr(main_cli, "run_vagrant_boxes", fake_run)

    main_cli.main()

    assert called == {
        "path": "/opt/bin/vagrant",
        "dry_run": True,
        "config": Config(directories=("/vm/from-file",), power_on=None, assume_yes=True),
    }
    assert "Upgraded 1 box(es)" in capsys.readouterr().out


def test_main_reports_skipped_boxes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    args = _args(tmp_path, directories=["/vm/a"], no_power_on=True)
    monkeypatch.setattr(main_cli, "parse_args", lambda: args)
    monkeypatch.setattr(main_cli, "configure_logging", lambda _verbose: None)
    monkeypatch.setattr(main_cli, "find_vagrant", lambda: "vagrant")
    monkeypatch.setattr(
        main_cli,
        "run_vagrant_boxes",
        lambda _vagrant, _config: RunReport(skipped=[VagrantBox("default", "/vm/a")]),
    )

    main_cli.main()

    assert "Upgraded 0 box(es), skipped 1 powered off box(es)" in capsys.readouterr().out


def test_main_fails_without_directories_before_looking_for_vagrant(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
):
    args = _args(tmp_path)
    monkeypatch.setattr(main_cli, "parse_args", lambda: args)
    monkeypatch.setattr(main_cli, "configure_logging", lambda _verbose: None)
    monkeypatch.setattr(
        main_cli, "find_vagrant", lambda: pytest.fail("vagrant lookup should not happen")
    )

    with pytest.raises(SystemExit) as exc_info:
        main_cli.main()
    assert exc_info.value.code == 1
    assert "No Vagrant directories configured" in capsys.readouterr().err


def test_main_fails_when_vagrant_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    args = _args(tmp_path, directories=["/vm/a"])
    monkeypatch.setattr(main_cli, "parse_args", lambda: args)
    monkeypatch.setattr(main_cli, "configure_logging", lambda _verbose: None)
    monkeypatch.setattr("boxgrade.orchestrator.shutil.which", lambda _name: None)
    monkeypatch.setattr(
        main_cli, "run_vagrant_boxes", lambda *_args: pytest.fail("run should not start")
    )

    with pytest.raises(SystemExit) as exc_info:
        main_cli.main()
    assert exc_info.value.code == 1
    assert "Command not found: vagrant" in capsys.readouterr().err


@pytest.mark.parametrize(("verbose", "level"), [(True, logging.DEBUG), (False, logging.WARNING)])
def test_configure_logging_level(monkeypatch: pytest.MonkeyPatch, verbose: bool, level: int):
    called: dict[str, object] = {}
    monkeypatch.setattr(main_cli.logging, "basicConfig", lambda **kwargs: called.update(kwargs))
    main_cli.configure_logging(verbose)
    assert called == {"level": level, "format": main_cli.LOG_FORMAT}
