# Gentoo-Xfce-Setup/xfce_setup/system_utils.py

import os
import pwd
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
import logging

from xfce_setup.logger_utils import app_logger as default_script_logger

COMMAND_NOT_FOUND_STATUS = 127


def format_command(command: Union[str, List[str]]) -> str:
    """Returns a printable form of a command, as it would be typed in a shell."""
    if isinstance(command, str):
        return command
    return " ".join(shlex.quote(str(part)) for part in command)


def run_command(
    command: Union[str, List[str]],
    capture_output: bool = False,
    check: bool = True,
    shell: bool = False,
    env_vars: Optional[Dict[str, str]] = None,
    print_fn_info: Optional[Callable[[str], None]] = None,
    print_fn_error: Optional[Callable[[str], None]] = None,
    logger: Optional[logging.Logger] = None
) -> subprocess.CompletedProcess:
    """
    Runs a command with logging.

    Raises subprocess.CalledProcessError when check is True and the command exits
    non-zero. A missing executable yields exit status 127.
    """
    log = logger or default_script_logger
    _p_error = print_fn_error or (lambda msg: None)

    if not isinstance(command, (str, list)):
        raise TypeError("Command must be a string or list of strings.")

    display_command_str = format_command(command)
    current_env = os.environ.copy()
    if env_vars:
        current_env.update(env_vars)

    log.info(f"Executing: {display_command_str}")
    if print_fn_info:
        print_fn_info(f"Executing: {display_command_str}")

    try:
        process = subprocess.run(
            command,
            check=False, # checked below so the failure is logged before raising
            capture_output=capture_output,
            text=True,
            shell=shell,
            env=current_env
        )
    except FileNotFoundError:
        executable = command[0] if isinstance(command, list) and command else display_command_str.split()[0]
        log.error(f"Command executable not found: '{executable}' (Full command attempted: '{display_command_str}')")
        _p_error(f"Command executable not found: '{executable}'. Ensure it's installed and in PATH.")
        # Reported like a shell would: exit status 127.
        process = subprocess.CompletedProcess(command, COMMAND_NOT_FOUND_STATUS, stdout="", stderr=f"{executable}: command not found")

    if process.stdout and process.stdout.strip():
        log.debug(f"CMD STDOUT for '{display_command_str}':\n{process.stdout.strip()}")
    if process.stderr and process.stderr.strip():
        # Portage writes progress to stderr, so this is not an error by itself.
        log.warning(f"CMD STDERR for '{display_command_str}':\n{process.stderr.strip()}")

    if check and process.returncode != 0:
        log.error(f"Command '{display_command_str}' returned non-zero exit status {process.returncode}.")
        _p_error(f"Command failed: '{display_command_str}' (Exit code: {process.returncode}). Check logs.")
        raise subprocess.CalledProcessError(
            returncode=process.returncode,
            cmd=command,
            output=process.stdout,
            stderr=process.stderr
        )

    return process


# --- User Info ---

def get_target_user(logger: Optional[logging.Logger] = None) -> Optional[str]:
    """
    Determines the user the desktop is being set up for.

    Under sudo this is SUDO_USER, otherwise the user running the script.
    """
    log = logger or default_script_logger

    if os.geteuid() == 0:
        target_user = os.environ.get("SUDO_USER")
        if not target_user:
            log.warning("Running as root without SUDO_USER; the desktop will be set up for root.")
            return "root"
        try:
            pwd.getpwnam(target_user)
        except KeyError:
            log.error(f"The user '{target_user}' (from SUDO_USER) does not appear to be a valid system user.")
            return None
        log.info(f"Target user determined: {target_user} (from SUDO_USER with root privileges)")
        return target_user

    try:
        current_user = pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        log.error(f"Could not determine the user name for UID {os.getuid()}.")
        return None
    log.warning(f"Script is not running as root. Operations will target the current user ({current_user}).")
    return current_user


def get_user_home_dir(username: str, logger: Optional[logging.Logger] = None) -> Optional[Path]:
    """Gets the home directory for the specified username from the password database."""
    log = logger or default_script_logger
    try:
        home_dir = Path(pwd.getpwnam(username).pw_dir)
    except KeyError:
        log.error(f"User '{username}' not found in the password database.")
        return None
    log.info(f"Home directory for '{username}' is '{home_dir}'.")
    return home_dir


# --- Files ---

def file_contains_line(file_path: Path, line: str) -> bool:
    """True if file_path exists and has line on a line of its own, ignoring surrounding whitespace."""
    file_path = Path(file_path)
    if not file_path.is_file():
        return False
    with open(file_path, "r", encoding="utf-8") as f:
        return any(entry.strip() == line for entry in f)


def append_line_to_file(file_path: Path, line: str, logger: Optional[logging.Logger] = None):
    """
    Appends a single line to a text file, creating the file if needed.
    No duplicate check is made. OSError propagates to the caller.
    """
    log = logger or default_script_logger
    file_path = Path(file_path)

    prefix = ""
    if file_path.is_file() and file_path.stat().st_size > 0:
        with open(file_path, "rb") as f:
            f.seek(-1, os.SEEK_END)
            if f.read(1) != b"\n":
                prefix = "\n"

    with open(file_path, "a", encoding="utf-8") as f:
        f.write(f"{prefix}{line}\n")
    log.info(f"Appended '{line}' to {file_path}.")


def write_file_for_user(
    file_path: Path,
    content: str,
    username: Optional[str] = None,
    logger: Optional[logging.Logger] = None
):
    """Overwrites file_path with content and, when running as root, hands it to username."""
    log = logger or default_script_logger
    file_path = Path(file_path)

    file_path.write_text(content, encoding="utf-8")
    log.info(f"Wrote {file_path}.")

    if username and os.geteuid() == 0:
        pw_entry = pwd.getpwnam(username)
        os.chown(file_path, pw_entry.pw_uid, pw_entry.pw_gid)
        log.info(f"Changed owner of {file_path} to {username}.")


# --- Groups & Environment ---

def add_user_to_group(username: str, group: str, logger: Optional[logging.Logger] = None):
    """Adds username to a supplementary group with gpasswd."""
    run_command(["gpasswd", "-a", username, group], capture_output=True, logger=logger)


def parse_env_block(raw: str) -> Dict[str, str]:
    """Parses NUL separated KEY=VALUE pairs as printed by `env -0`."""
    env: Dict[str, str] = {}
    for entry in raw.split("\0"):
        if "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        env[key] = value
    return env


def refresh_environment(profile_path: str = "/etc/profile", logger: Optional[logging.Logger] = None):
    """
    Regenerates the environment files with env-update and loads the sourced profile
    into this process, so later steps see the updated PATH and friends.
    """
    log = logger or default_script_logger
    run_command(["env-update"], capture_output=True, logger=log)
    process = run_command(
        ["bash", "-c", f"source {shlex.quote(profile_path)} && env -0"],
        capture_output=True,
        logger=log
    )
    refreshed = parse_env_block(process.stdout)
    os.environ.update(refreshed)
    log.info(f"Loaded {len(refreshed)} environment variables from {profile_path}.")
