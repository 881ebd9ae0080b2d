# Gentoo-Xfce-Setup/tests/test_install.py

import json

import install
from xfce_setup.config import LEGACY_FATAL_MESSAGE
from xfce_setup.provisioner import (
    ConfigurationWriteError,
    ExternalCommandError,
    ProvisioningResult,
    ProvisioningState,
)


def failed(error):
    return ProvisioningResult(ProvisioningState.FAILED, [], error)


def test_strict_failure_propagates_status(capsys):
    code = install.report_failure(failed(ExternalCommandError("install pkgA", 2, command="emerge pkgA")), strict=True)
    out = capsys.readouterr().out
    assert code == 2
    assert "install pkgA" in out
    assert "emerge pkgA" in out


def test_legacy_failure_exits_one(capsys):
    code = install.report_failure(failed(ExternalCommandError("install pkgA", 2, command="emerge pkgA")), strict=False)
    out = capsys.readouterr().out
    assert code == 1
    assert LEGACY_FATAL_MESSAGE in out
    assert "emerge pkgA" not in out


def test_write_failure_exits_one():
    assert install.report_failure(failed(ConfigurationWriteError("set USE flags", 1)), strict=True) == 1


def test_signal_status_maps_to_shell_convention():
    assert install.report_failure(failed(ExternalCommandError("sync package tree", -9)), strict=True) == 137


def test_detail_with_brackets_is_printed_verbatim(capsys):
    error = ExternalCommandError("install pkgA", 1, detail="[ebuild  N] x11-libs/gtk+[/usr]")
    install.report_failure(failed(error), strict=True)
    assert "[ebuild  N] x11-libs/gtk+[/usr]" in capsys.readouterr().out


def test_main_reports_bad_config(monkeypatch, tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"packages": "not-a-list"}))
    monkeypatch.setenv("XFCE_SETUP_CONFIG", str(path))

    assert install.main() == 1
    assert "Critical" in capsys.readouterr().out


def test_run_setup_needs_a_user(monkeypatch, app_config):
    monkeypatch.setattr(install.util, "get_target_user", lambda logger=None: None)
    assert install.run_setup(app_config) == 1


def test_run_setup_cancelled(monkeypatch, app_config, tmp_path):
    monkeypatch.setattr(install.util, "get_target_user", lambda logger=None: "alice")
    monkeypatch.setattr(install.util, "get_user_home_dir", lambda user, logger=None: tmp_path)
    monkeypatch.setattr(install.con, "confirm_action", lambda *args, **kwargs: False)

    def must_not_run(self, plan):
        raise AssertionError("plan ran after the user declined")

    monkeypatch.setattr(install.Provisioner, "run", must_not_run)

    assert install.run_setup(app_config) == 0


def test_missing_override_config_is_fatal(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("XFCE_SETUP_CONFIG", str(tmp_path / "typo.json"))

    assert install.main() == 1
    assert "Critical" in capsys.readouterr().out


def test_cli_handles_ctrl_c(monkeypatch, capsys):
    def interrupted():
        raise KeyboardInterrupt

    monkeypatch.setattr(install, "main", interrupted)

    assert install.cli() == install.EXIT_CANCELLED
    assert "cancelled" in capsys.readouterr().out


def test_cli_reports_unexpected_errors_verbatim(monkeypatch, capsys):
    def broken():
        raise ValueError("bad value [/etc/portage]")

    monkeypatch.setattr(install, "main", broken)

    assert install.cli() == 1
    assert "bad value [/etc/portage]" in capsys.readouterr().out


def test_user_and_home_with_brackets_are_printed(monkeypatch, app_config, tmp_path, capsys):
    home = tmp_path / "[/home]"
    home.mkdir(parents=True)
    monkeypatch.setattr(install.util, "get_target_user", lambda logger=None: "[/bob]")
    monkeypatch.setattr(install.util, "get_user_home_dir", lambda user, logger=None: home)
    monkeypatch.setattr(install.con, "confirm_action", lambda *args, **kwargs: False)

    assert install.run_setup(app_config) == 0
    assert "[/bob]" in capsys.readouterr().out
