"""APT inventory scanner implementation.

Queries installed packages using dpkg-query, determines installation
status using apt-mark and reads apt's history logs.
"""

import gzip
import logging
import re
import subprocess
from pathlib import Path

from aptsync.core.paths import APT_LOG_DIR
from aptsync.models.package import InstalledSet
from aptsync.scanners.base import ProbeError, Scanner
from aptsync.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

# history.log, history.log.1, history.log.2.gz, ...
_HISTORY_FILE_RE = re.compile(r"^history\.log(?:\.(\d+))?(\.gz)?$")

# Third word of the dpkg status triple (want, error, state)
_INSTALLED_STATE = "installed"


class AptScanner(Scanner):
    """Scanner for APT/dpkg packages.

    Uses dpkg-query to list installed packages and apt-mark
    to distinguish between manually and automatically installed packages.

    Attributes:
        log_dir: Directory containing apt's history.log files.
    """

    # dpkg-query format string: Package, Status
    _DPKG_FORMAT = "${Package}\\t${Status}\\n"

    # Timeout for read-only queries
    _QUERY_TIMEOUT: float = 60.0

    def __init__(self, log_dir: Path = APT_LOG_DIR) -> None:
        """Initialize the scanner.

        Args:
            log_dir: Directory containing apt's history logs.
        """
        self.log_dir = log_dir

    @property
    def name(self) -> str:
        """Return "apt" as the package manager name."""
        return "apt"

    def is_available(self) -> bool:
        """Check if dpkg-query and apt-mark are available."""
        return command_exists("dpkg-query") and command_exists("apt-mark")

    def query_installed(self) -> InstalledSet:
        """Query all installed APT packages.

        Returns:
            InstalledSet with every fully installed package and its
            auto-installed subset.

        Raises:
            ProbeError: If dpkg-query or apt-mark are unavailable or fail.
        """
        if not self.is_available():
            msg = "APT package manager is not available on this system"
            raise ProbeError(msg)

        auto_packages = self._get_auto_installed()

        result = self._run(["dpkg-query", "-W", "-f", self._DPKG_FORMAT])
        if not result.success:
            msg = f"dpkg-query failed: {result.diagnostic}"
            raise ProbeError(msg)

        installed = parse_dpkg_status(result.stdout)
        logger.debug(
            "dpkg reports %d installed package(s), %d auto-installed",
            len(installed),
            len(auto_packages & installed),
        )
        return InstalledSet.of(installed, auto_packages)

    def _get_auto_installed(self) -> set[str]:
        """Get set of package names that were auto-installed.

        Raises:
            ProbeError: If apt-mark showauto fails.
        """
        result = self._run(["apt-mark", "showauto"])
        if not result.success:
            # Do not silently continue - the data would be unreliable
            msg = f"apt-mark showauto failed: {result.diagnostic}"
            raise ProbeError(msg)

        return {pkg.strip() for pkg in result.stdout.splitlines() if pkg.strip()}

    def _run(self, args: list[str]) -> CommandResult:
        """Run a read-only query, converting execution errors to ProbeError."""
        try:
            return run_command(args, timeout=self._QUERY_TIMEOUT)
        except (OSError, subprocess.TimeoutExpired) as e:
            msg = f"{args[0]} could not be executed: {e}"
            raise ProbeError(msg) from e

    def history_files(self) -> list[Path]:
        """List history log files, oldest first.

        Rotated logs carry a higher number the older they are, and the
        current ``history.log`` is always the newest.

        Returns:
            Paths ordered from oldest to newest.
        """
        try:
            candidates = list(self.log_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot list apt log directory %s: %s", self.log_dir, e)
            return []

        ranked: list[tuple[int, Path]] = []
        for path in candidates:
            match = _HISTORY_FILE_RE.match(path.name)
            if match is None:
                continue
            rotation = int(match.group(1)) if match.group(1) else 0
            ranked.append((rotation, path))

        ranked.sort(key=lambda item: item[0], reverse=True)
        return [path for _, path in ranked]

    def read_history_log(self) -> str:
        """Read all apt history logs as one text, oldest entries first.

        Unreadable files are skipped with a warning.

        Returns:
            Concatenated log text.
        """
        chunks: list[str] = []
        for path in self.history_files():
            try:
                if path.suffix == ".gz":
                    with gzip.open(path, "rt", encoding="utf-8", errors="replace") as f:
                        chunks.append(f.read())
                else:
                    chunks.append(path.read_text(encoding="utf-8", errors="replace"))
            except (OSError, EOFError) as e:
                logger.warning("Skipping unreadable history log %s: %s", path, e)
                continue
            logger.debug("Read history log %s", path)

        # Rotated files may lack a trailing newline
        return "\n".join(chunks)


def parse_dpkg_status(output: str) -> set[str]:
    """Parse ``${Package}\\t${Status}`` rows into installed package names.

    Rows without a tab or whose state is not ``installed`` (removed
    packages with leftover config, half-installed ones) are skipped. Held
    packages (``hold ok installed``) count as installed.

    Args:
        output: Raw dpkg-query output.

    Returns:
        Set of installed package names.
    """
    installed: set[str] = set()
    for line in output.splitlines():
        name, sep, status = line.partition("\t")
        name = name.strip()
        if not sep or not name:
            if line.strip():
                logger.debug("Skipping malformed dpkg line: %r", line[:100])
            continue
        words = status.split()
        if len(words) == 3 and words[2] == _INSTALLED_STATE:
            installed.add(name)
    return installed
