"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from aptsync.models.package import InstalledSet
from aptsync.utils.shell import CommandResult


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and the manifest override away from the real home."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("APT_SYNC_FILE", raising=False)
    return config_home


@pytest.fixture
def mock_dpkg_output() -> str:
    """Sample dpkg-query ``${Package}\\t${Status}`` output for testing."""
    return """git\tinstall ok installed
vim\tinstall ok installed
curl\thold ok installed
libc6\tinstall ok installed
python3\tinstall ok installed
oldpkg\tdeinstall ok config-files
brokenpkg\tinstall reinstreq half-installed"""


@pytest.fixture
def mock_apt_mark_output() -> str:
    """Sample apt-mark showauto output for testing."""
    return """libc6
python3
oldpkg"""


@pytest.fixture
def mock_malformed_output() -> str:
    """Malformed dpkg-query output for testing error handling."""
    return """firefox
\tinstall ok installed
weird\tinstalled"""


@pytest.fixture
def sample_history_log() -> str:
    """Sample /var/log/apt/history.log content with three transactions."""
    return """
Start-Date: 2026-01-05  09:14:02
Commandline: apt-get install -y git
Requested-By: alice (1000)
Install: git:amd64 (1:2.43.0-1ubuntu7), git-man:all (1:2.43.0-1ubuntu7, automatic), liberror-perl:all (0.17029-2, automatic)
End-Date: 2026-01-05  09:14:10

Start-Date: 2026-02-10  12:11:38
Commandline: apt upgrade
Upgrade: git:amd64 (1:2.43.0-1ubuntu7, 1:2.43.0-1ubuntu7.1), libc6:amd64 (2.39-0ubuntu8, 2.39-0ubuntu8.3)
End-Date: 2026-02-10  12:12:00

Start-Date: 2026-03-01  18:00:00
Commandline: apt remove vim
Requested-By: alice (1000)
Remove: vim:amd64 (2:9.1.0016-1ubuntu7)
End-Date: 2026-03-01  18:00:03
"""


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    """Curated list location passed to the CLI with --file."""
    return tmp_path / "packages.txt"


@pytest.fixture
def mock_scanner() -> Iterator[MagicMock]:
    """Replace the CLI's AptScanner with a mock instance.

    Tests set ``query_installed.return_value`` and
    ``read_history_log.return_value`` on the yielded mock.
    """
    with patch("aptsync.cli.types.AptScanner") as scanner_cls:
        scanner = scanner_cls.return_value
        scanner.query_installed.return_value = InstalledSet()
        scanner.read_history_log.return_value = ""
        yield scanner


@pytest.fixture
def mock_operator() -> Iterator[MagicMock]:
    """Replace the CLI's AptOperator with a mock that installs successfully."""
    with patch("aptsync.cli.types.AptOperator") as operator_cls:
        operator = operator_cls.return_value
        operator.install_command.side_effect = lambda name: ["apt-get", "install", "-y", name]
        operator.ensure_privileges.return_value = None
        operator.install_one.return_value = CommandResult(stdout="", stderr="", returncode=0)
        yield operator
