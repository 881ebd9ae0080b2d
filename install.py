# Gentoo-Xfce-Setup/install.py

import os
import sys
from pathlib import Path
from typing import Any, Dict

from rich.markup import escape

# Ensure the script's directory is in the Python path
sys.path.insert(0, str(Path(__file__).parent))

from xfce_setup import console_output as con
from xfce_setup import init_system
from xfce_setup import system_utils as util
from xfce_setup.config import LEGACY_FATAL_MESSAGE, config_override_set, resolve_config_path
from xfce_setup.config_loader import ConfigError, load_configuration
from xfce_setup.logger_utils import app_logger
from xfce_setup.package_provider import PortageProvider
from xfce_setup.plan_builder import build_xfce_plan
from xfce_setup.provisioner import Provisioner, ProvisioningResult, StepStatus

EXIT_CANCELLED = 130


def report_failure(result: ProvisioningResult, strict: bool) -> int:
    """Prints the fatal error line and returns the process exit code."""
    error = result.error
    if not strict:
        con.print_error(LEGACY_FATAL_MESSAGE, icon=False)
        return 1

    con.print_error(f"Step '{escape(error.step_name)}' failed with exit code {error.returncode}.")
    if error.command:
        con.print_error(f"Last attempted command: {escape(error.command)}", icon=False)
    if error.detail:
        con.print_error(escape(error.detail), icon=False)
    if error.returncode < 0:
        # killed by a signal, reported the way a shell does
        return 128 - error.returncode
    return error.returncode or 1


def _print_progress(name: str, status: StepStatus):
    if status is StepStatus.SKIPPED:
        con.print_sub_step(f"{escape(name)}: already done, skipping.")


def run_setup(app_config: Dict[str, Any]) -> int:
    """Resolves the explicit inputs, builds the plan and runs it. Returns the exit code."""
    strict = bool(app_config.get("strict"))

    target_user = util.get_target_user(logger=app_logger)
    home_dir = util.get_user_home_dir(target_user, logger=app_logger) if target_user else None
    if not target_user or not home_dir:
        con.print_error("Could not determine the target user or their home directory.")
        return 1

    init_kind = init_system.detect()
    provider = PortageProvider(emerge_args=app_config["emerge_args"])
    plan = build_xfce_plan(app_config, provider, init_kind, target_user, home_dir)

    con.print_step("Gentoo Xfce Setup")
    con.print_info(f"Target user: {escape(target_user)} ({escape(str(home_dir))}), init system: {init_kind.value}, {len(plan)} steps.")
    con.print_panel("\n".join(escape(name) for name in plan.step_names()), title="Provisioning plan")
    if os.geteuid() != 0:
        con.print_warning("Not running as root: emerge, gpasswd and service registration will most likely fail.")
    if not app_config.get("assume_yes") and not con.confirm_action("Proceed with the installation?", default=True):
        con.print_info("Installation cancelled.")
        return 0

    provisioner = Provisioner(
        on_start=lambda name: con.print_plain(f"{name[0].upper()}{name[1:]}..."),
        on_step=_print_progress
    )
    result = provisioner.run(plan)

    if not result.succeeded:
        return report_failure(result, strict)

    con.print_success("Xfce installation and setup complete! You can start Xfce by typing 'startx'.")
    return 0


def main() -> int:
    """Main function to run the Gentoo Xfce setup utility."""
    app_logger.info("Gentoo Xfce Setup started.")
    try:
        app_config = load_configuration(resolve_config_path(), must_exist=config_override_set())
        return run_setup(app_config)
    except ConfigError as e:
        con.print_error(f"Critical: {escape(str(e))}")
        return 1
    finally:
        app_logger.info("Gentoo Xfce Setup finished.")


def cli() -> int:
    """Console entry point: main() plus Ctrl-C and last-resort error handling."""
    try:
        return main()
    except KeyboardInterrupt:
        app_logger.warning("Interrupted by user.")
        con.print_info("\nOperation cancelled by user. Exiting.")
        return EXIT_CANCELLED
    except Exception as e:
        app_logger.critical(f"An unexpected critical error occurred: {e}", exc_info=True)
        con.print_error(f"An unexpected critical error occurred: {escape(str(e))}. Check the log file for details.")
        return 1


if __name__ == "__main__":
    sys.exit(cli())
