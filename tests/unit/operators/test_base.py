"""Unit tests for Operator ABC."""

import pytest
from aptsync.operators.base import Operator
from aptsync.utils.shell import CommandResult


class ConcreteOperator(Operator):
    """Concrete implementation for testing the ABC."""

    def __init__(self) -> None:
        self.installed: list[str] = []

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    def install_command(self, package: str) -> list[str]:
        return ["fake-install", package]

    def ensure_privileges(self) -> str | None:
        return None

    def install_one(self, package: str) -> CommandResult:
        self.installed.append(package)
        return CommandResult(stdout="", stderr="", returncode=0)


class TestOperator:
    """Tests for Operator ABC."""

    def test_cannot_instantiate_abc(self) -> None:
        """Operator cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Operator()  # type: ignore[abstract]

    def test_concrete_operator(self) -> None:
        """A complete subclass can be used."""
        operator = ConcreteOperator()
        assert operator.install_command("htop") == ["fake-install", "htop"]
        assert operator.install_one("htop").success is True
        assert operator.installed == ["htop"]
