"""Unit tests for InstallOutcome model."""

import pytest
from aptsync.models.outcome import (
    DRY_RUN_REASON,
    InstallOutcome,
    OutcomeKind,
    failed,
    skipped,
    succeeded,
)


class TestInstallOutcome:
    """Tests for InstallOutcome dataclass."""

    def test_succeeded_factory(self) -> None:
        """succeeded creates an outcome without a reason."""
        outcome = succeeded("git", ("apt-get", "install", "-y", "git"))
        assert outcome.kind == OutcomeKind.SUCCEEDED
        assert outcome.succeeded is True
        assert outcome.failed is False
        assert outcome.reason is None

    def test_failed_factory(self) -> None:
        """failed carries the diagnostic text."""
        outcome = failed("nope", "E: Unable to locate package nope")
        assert outcome.failed is True
        assert outcome.reason == "E: Unable to locate package nope"

    def test_skipped_factory(self) -> None:
        """skipped uses the dry-run reason and keeps the command."""
        command = ("sudo", "apt-get", "install", "-y", "zsh")
        outcome = skipped("zsh", command)
        assert outcome.skipped is True
        assert outcome.reason == DRY_RUN_REASON
        assert outcome.command == command

    def test_failed_requires_reason(self) -> None:
        """A FAILED outcome without a reason is rejected."""
        with pytest.raises(ValueError, match="requires a reason"):
            InstallOutcome(package="git", kind=OutcomeKind.FAILED)

    def test_empty_package_rejected(self) -> None:
        """Package name cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            succeeded("")
