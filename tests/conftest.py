# Gentoo-Xfce-Setup/tests/conftest.py

import subprocess
from typing import Dict, List, Optional

import pytest

from xfce_setup.config_loader import load_configuration


class FakeProvider:
    """Records every package operation; failures and installed packages are preset."""

    def __init__(self, installed=(), failures: Optional[Dict[str, int]] = None):
        self.installed = set(installed)
        self.failures = failures or {}
        self.calls: List[str] = []

    def _maybe_fail(self, call: str, command: List[str]):
        self.calls.append(call)
        if call in self.failures:
            raise subprocess.CalledProcessError(self.failures[call], command, stderr="emerge: there are no ebuilds")

    def sync(self):
        self._maybe_fail("sync", ["emerge", "--sync"])

    def set_profile(self, name):
        self._maybe_fail(f"set_profile {name}", ["eselect", "profile", "set", name])

    def install(self, name):
        self._maybe_fail(f"install {name}", ["emerge", name])
        self.installed.add(name)

    def is_installed(self, name):
        self.calls.append(f"is_installed {name}")
        return name in self.installed


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def app_config(tmp_path):
    config = load_configuration(None)
    config["make_conf_path"] = str(tmp_path / "make.conf")
    return config
