# Gentoo-Xfce-Setup/xfce_setup/plan_builder.py

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol

from xfce_setup import system_utils as util
from xfce_setup.config_loader import groups_for, skip_installed_enabled
from xfce_setup.init_system import InitSystemKind
from xfce_setup.logger_utils import get_logger
from xfce_setup.provisioner import ProvisioningPlan, ProvisioningStep

log = get_logger("plan_builder")


class PackageProvider(Protocol):
    """What the plan needs from the host package manager."""

    def sync(self) -> None:
        ...

    def install(self, name: str) -> None:
        ...

    def is_installed(self, name: str) -> bool:
        ...

    def set_profile(self, name: str) -> None:
        ...


def service_steps(
    init_kind: InitSystemKind,
    services: List[str],
    run_command: Callable[..., Any] = util.run_command
) -> List[ProvisioningStep]:
    """One enable step per service, in the form the detected init system expects."""
    steps = []
    for service in services:
        command = init_kind.enable_service_command(service)
        steps.append(ProvisioningStep(
            name=f"enable {service} ({init_kind.value})",
            action=lambda command=command: run_command(command, capture_output=True, logger=log)
        ))
    return steps


def build_xfce_plan(
    app_config: Dict[str, Any],
    provider: PackageProvider,
    init_kind: InitSystemKind,
    target_user: str,
    home_dir: Path,
    refresh_environment: Optional[Callable[[], None]] = None,
    add_user_to_group: Callable[[str, str], None] = util.add_user_to_group,
    run_command: Callable[..., Any] = util.run_command
) -> ProvisioningPlan:
    """
    Builds the ordered Xfce setup plan.

    The user, home directory and init system are decided by the caller; nothing here
    looks at the ambient process state.
    """
    plan = ProvisioningPlan()
    profile = app_config["profile"]
    make_conf = Path(app_config["make_conf_path"])
    use_line = app_config["use_flags_line"]

    plan.append(ProvisioningStep(name="sync package tree", action=provider.sync))
    plan.append(ProvisioningStep(
        name=f"set profile {profile}",
        action=lambda: provider.set_profile(profile)
    ))

    use_flags_check = None
    if app_config.get("idempotent_use_flags"):
        use_flags_check = lambda: util.file_contains_line(make_conf, use_line)
    plan.append(ProvisioningStep(
        name="set USE flags",
        action=lambda: util.append_line_to_file(make_conf, use_line, logger=log),
        idempotent_check=use_flags_check
    ))

    check_installed = skip_installed_enabled(app_config)
    for package in app_config["packages"]:
        plan.append(ProvisioningStep(
            name=f"install {package}",
            action=lambda package=package: provider.install(package),
            idempotent_check=(lambda package=package: provider.is_installed(package)) if check_installed else None
        ))

    for group in groups_for(app_config):
        plan.append(ProvisioningStep(
            name=f"add {target_user} to group {group}",
            action=lambda group=group: add_user_to_group(target_user, group)
        ))

    plan.append(ProvisioningStep(
        name="refresh environment",
        action=refresh_environment or (lambda: util.refresh_environment(logger=log))
    ))

    xinitrc = Path(home_dir) / ".xinitrc"
    plan.append(ProvisioningStep(
        name="create .xinitrc",
        action=lambda: util.write_file_for_user(xinitrc, app_config["xinitrc_content"], target_user, logger=log)
    ))

    plan.extend(service_steps(init_kind, app_config["services"], run_command=run_command))

    log.info(f"Built plan with {len(plan)} steps for user '{target_user}' ({init_kind.value}).")
    return plan
