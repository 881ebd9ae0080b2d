# Gentoo-Xfce-Setup/tests/test_init_system.py

from xfce_setup.init_system import InitSystemKind, detect


def test_detects_systemd_from_marker(tmp_path):
    marker = tmp_path / "run" / "systemd" / "system"
    marker.mkdir(parents=True)
    assert detect(marker) is InitSystemKind.SYSTEMD


def test_falls_back_to_openrc(tmp_path):
    assert detect(tmp_path / "missing") is InitSystemKind.OPENRC


def test_marker_must_be_a_directory(tmp_path):
    marker = tmp_path / "system"
    marker.write_text("")
    assert detect(marker) is InitSystemKind.OPENRC


def test_enable_commands():
    assert InitSystemKind.SYSTEMD.enable_service_command("dbus") == ["systemctl", "enable", "dbus.service"]
    assert InitSystemKind.OPENRC.enable_service_command("dbus") == ["rc-update", "add", "dbus", "default"]
