# Gentoo-Xfce-Setup/xfce_setup/init_system.py

from enum import Enum
from pathlib import Path
from typing import List, Optional

from xfce_setup.config import SYSTEMD_MARKER_DIR
from xfce_setup.logger_utils import get_logger

log = get_logger("init_system")


class InitSystemKind(Enum):
    SYSTEMD = "systemd"
    OPENRC = "openrc"

    def enable_service_command(self, service: str) -> List[str]:
        """The command that registers service to start at boot under this init system."""
        if self is InitSystemKind.SYSTEMD:
            return ["systemctl", "enable", f"{service}.service"]
        return ["rc-update", "add", service, "default"]


def detect(marker: Optional[Path] = None) -> InitSystemKind:
    """Systemd creates /run/systemd/system at boot; anything else is treated as OpenRC."""
    marker = marker or SYSTEMD_MARKER_DIR
    kind = InitSystemKind.SYSTEMD if marker.is_dir() else InitSystemKind.OPENRC
    log.info(f"Detected init system: {kind.value} (marker {marker})")
    return kind
