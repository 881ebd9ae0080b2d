# Gentoo-Xfce-Setup/xfce_setup/package_provider.py

from typing import List, Optional, Sequence

from xfce_setup import system_utils as util
from xfce_setup.logger_utils import get_logger

log = get_logger("package_provider")


class PortageProvider:
    """
    Package operations backed by Portage.

    Every method except is_installed raises subprocess.CalledProcessError when the
    underlying command fails (status 127 when the tool is missing).
    """

    def __init__(self, emerge_args: Optional[Sequence[str]] = None, root: str = "/"):
        self.emerge_args: List[str] = list(emerge_args or [])
        self.root = root

    def sync(self):
        util.run_command(["emerge", "--sync"], capture_output=True, logger=log)

    def set_profile(self, name: str):
        util.run_command(["eselect", "profile", "set", name], capture_output=True, logger=log)

    def install(self, name: str):
        util.run_command(["emerge", *self.emerge_args, name], capture_output=True, logger=log)

    def is_installed(self, name: str) -> bool:
        """Queries the installed-package database; any failure counts as not installed."""
        process = util.run_command(
            ["portageq", "has_version", self.root, name],
            capture_output=True,
            check=False,
            logger=log
        )
        if process.returncode == util.COMMAND_NOT_FOUND_STATUS:
            log.warning("'portageq' not found, cannot check whether packages are installed.")
            return False
        installed = process.returncode == 0
        log.info(f"Package '{name}' is {'already' if installed else 'not'} installed.")
        return installed
