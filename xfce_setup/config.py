# Gentoo-Xfce-Setup/xfce_setup/config.py

import os
from pathlib import Path
from typing import Any, Dict

# --- Constants ---
CONFIG_FILE_NAME = "xfce_packages.json"
CONFIG_ENV_VAR = "XFCE_SETUP_CONFIG"

# Default config file sits next to install.py
CONFIG_FILE_PATH = Path(__file__).resolve().parent.parent / CONFIG_FILE_NAME

SYSTEMD_MARKER_DIR = Path("/run/systemd/system")

LEGACY_FATAL_MESSAGE = "Fatal error occurred during installation."

# --- Defaults ---
# Mirrors xfce_packages.json; the JSON file overrides any of these keys.
DEFAULT_CONFIG: Dict[str, Any] = {
    "profile": "default/linux/amd64/23.0/desktop",
    "make_conf_path": "/etc/portage/make.conf",
    "use_flags_line": 'USE="X gtk gnome systemd"',
    # Repeated runs append the USE line again unless this is enabled.
    "idempotent_use_flags": False,
    "packages": [
        "sys-apps/systemd",
        "xfce-base/xfce4-meta",
        "xfce-extra/xfce4-pulseaudio-plugin",
        "xfce-extra/xfce4-taskmanager",
        "x11-themes/xfwm4-themes",
        "app-editors/mousepad",
        "xfce-base/xfce4-power-manager",
        "x11-terms/xfce4-terminal",
        "xfce-base/thunar",
        "www-client/firefox",
    ],
    "emerge_args": ["--ask=n"],
    "groups": ["audio", "cdrom", "cdrw", "usb"],
    "legacy_groups": ["cdrom", "cdrw", "usb"],
    "services": ["dbus", "display-manager"],
    "xinitrc_content": "exec startxfce4\n",
    # strict: skip already-installed packages, report exit codes, add 'audio' group.
    "strict": True,
    "skip_installed": None, # None follows 'strict'
    "assume_yes": False,
}


def resolve_config_path() -> Path:
    """Returns the configuration file path, honouring the XFCE_SETUP_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE_PATH


def config_override_set() -> bool:
    """True when the user pointed XFCE_SETUP_CONFIG at a file; that file must then exist."""
    return bool(os.environ.get(CONFIG_ENV_VAR))
