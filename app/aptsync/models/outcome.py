"""Install outcome models.

This module defines the per-package result of an install attempt
produced by the install orchestrator.
"""

from dataclasses import dataclass, field
from enum import Enum

from aptsync.models.package import PackageName

DRY_RUN_REASON = "dry-run"


class OutcomeKind(Enum):
    """Kind of install outcome.

    Attributes:
        SUCCEEDED: The package manager installed the package.
        FAILED: The install call failed; ``reason`` holds the diagnostic.
        SKIPPED: Planned only (dry-run); no mutating call was made.
    """

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """Result of attempting to install a single package.

    Attributes:
        package: Name of the package.
        kind: Outcome kind.
        reason: Diagnostic text for failures, ``"dry-run"`` for skips.
        command: The command that was run (or would run in dry-run mode).
    """

    package: PackageName
    kind: OutcomeKind
    reason: str | None = None
    command: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        """Validate outcome data after initialization."""
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if self.kind == OutcomeKind.FAILED and not self.reason:
            msg = f"Failed outcome for {self.package} requires a reason"
            raise ValueError(msg)

    @property
    def succeeded(self) -> bool:
        """Check if the install succeeded."""
        return self.kind == OutcomeKind.SUCCEEDED

    @property
    def failed(self) -> bool:
        """Check if the install failed."""
        return self.kind == OutcomeKind.FAILED

    @property
    def skipped(self) -> bool:
        """Check if the install was skipped (dry-run)."""
        return self.kind == OutcomeKind.SKIPPED


def succeeded(package: PackageName, command: tuple[str, ...] = ()) -> InstallOutcome:
    """Create a SUCCEEDED outcome."""
    return InstallOutcome(package=package, kind=OutcomeKind.SUCCEEDED, command=command)


def failed(package: PackageName, reason: str, command: tuple[str, ...] = ()) -> InstallOutcome:
    """Create a FAILED outcome carrying the diagnostic text."""
    return InstallOutcome(package=package, kind=OutcomeKind.FAILED, reason=reason, command=command)


def skipped(package: PackageName, command: tuple[str, ...] = ()) -> InstallOutcome:
    """Create a SKIPPED (dry-run) outcome."""
    return InstallOutcome(
        package=package,
        kind=OutcomeKind.SKIPPED,
        reason=DRY_RUN_REASON,
        command=command,
    )
