# Gentoo-Xfce-Setup/xfce_setup/provisioner.py

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional

from xfce_setup.logger_utils import get_logger
from xfce_setup.system_utils import format_command

log = get_logger("provisioner")


class ProvisioningError(Exception):
    """A step failed; carries the step name, exit status and last attempted command."""

    kind = "provisioning failure"

    def __init__(self, step_name: str, returncode: int, command: Optional[str] = None, detail: str = ""):
        self.step_name = step_name
        self.returncode = returncode
        self.command = command
        self.detail = detail
        super().__init__(self.describe())

    def describe(self) -> str:
        message = f"Step '{self.step_name}' failed ({self.kind}) with exit code {self.returncode}"
        if self.command:
            message += f"; last command: {self.command}"
        if self.detail:
            message += f"; {self.detail}"
        return message


class ExternalCommandError(ProvisioningError):
    kind = "external command"


class ConfigurationWriteError(ProvisioningError):
    kind = "configuration write"


class ProvisioningState(Enum):
    NOT_STARTED = "not started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepStatus(Enum):
    RAN = "ran"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ProvisioningStep:
    """One unit of system setup work. action raises on failure."""

    name: str
    action: Callable[[], None]
    idempotent_check: Optional[Callable[[], bool]] = None


@dataclass(frozen=True)
class StepOutcome:
    name: str
    status: StepStatus


@dataclass
class ProvisioningPlan:
    steps: List[ProvisioningStep] = field(default_factory=list)

    def append(self, step: ProvisioningStep):
        self.steps.append(step)

    def extend(self, steps: Iterable[ProvisioningStep]):
        self.steps.extend(steps)

    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]

    def __iter__(self) -> Iterator[ProvisioningStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)


@dataclass
class ProvisioningResult:
    state: ProvisioningState
    outcomes: List[StepOutcome]
    error: Optional[ProvisioningError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is ProvisioningState.COMPLETED

    def names_with_status(self, status: StepStatus) -> List[str]:
        return [outcome.name for outcome in self.outcomes if outcome.status is status]


def error_from_exception(step_name: str, exc: Exception) -> ProvisioningError:
    """Maps an exception raised by a step action to the provisioning error taxonomy."""
    if isinstance(exc, subprocess.CalledProcessError):
        detail = (exc.stderr or "").strip().splitlines()
        return ExternalCommandError(
            step_name,
            exc.returncode,
            command=format_command(exc.cmd),
            detail=detail[-1] if detail else ""
        )
    return ConfigurationWriteError(step_name, 1, detail=str(exc))


class Provisioner:
    """
    Runs a ProvisioningPlan once, in order, stopping at the first failure.

    State: NOT_STARTED -> RUNNING -> COMPLETED | FAILED. Completed steps are not rolled back.
    """

    def __init__(
        self,
        on_start: Optional[Callable[[str], None]] = None,
        on_step: Optional[Callable[[str, StepStatus], None]] = None
    ):
        self.state = ProvisioningState.NOT_STARTED
        self._on_start = on_start or (lambda name: None)
        self._on_step = on_step or (lambda name, status: None)

    def run(self, plan: ProvisioningPlan) -> ProvisioningResult:
        if self.state is not ProvisioningState.NOT_STARTED:
            raise RuntimeError(f"Provisioner already {self.state.value}; create a new one for another run.")

        self.state = ProvisioningState.RUNNING
        outcomes: List[StepOutcome] = []
        log.info(f"Running provisioning plan with {len(plan)} steps.")

        for step in plan:
            try:
                if step.idempotent_check is not None and step.idempotent_check():
                    log.info(f"Skipping step '{step.name}' (already satisfied)")
                    outcomes.append(StepOutcome(step.name, StepStatus.SKIPPED))
                    self._on_step(step.name, StepStatus.SKIPPED)
                    continue

                log.info(f"Running step '{step.name}'")
                self._on_start(step.name)
                step.action()
            except (subprocess.CalledProcessError, OSError) as e:
                error = error_from_exception(step.name, e)
                log.error(error.describe())
                outcomes.append(StepOutcome(step.name, StepStatus.FAILED))
                self._on_step(step.name, StepStatus.FAILED)
                self.state = ProvisioningState.FAILED
                return ProvisioningResult(self.state, outcomes, error)
            except BaseException:
                # not a provisioning failure, but the run is still over
                log.error(f"Step '{step.name}' raised an unexpected error; aborting the plan.")
                self.state = ProvisioningState.FAILED
                raise

            outcomes.append(StepOutcome(step.name, StepStatus.RAN))
            self._on_step(step.name, StepStatus.RAN)

        self.state = ProvisioningState.COMPLETED
        log.info("Provisioning plan completed.")
        return ProvisioningResult(self.state, outcomes)
