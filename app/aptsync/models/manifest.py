"""Curated package set model.

The curated set is the user-declared list of packages that should exist
on every synced machine. It is validated with Pydantic and keeps
insertion order for stable display.
"""

import re
from collections.abc import Iterable
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aptsync.models.package import PackageName

# No whitespace anywhere; must not look like a comment or a CLI option
_NAME_PATTERN = re.compile(r"^[^\s#-]\S*$")


def validate_package_name(name: str) -> PackageName:
    """Validate a single package name.

    Args:
        name: Candidate package name (already stripped).

    Returns:
        The name unchanged.

    Raises:
        ValueError: If the name is empty or malformed.
    """
    if not name:
        msg = "Package name cannot be empty"
        raise ValueError(msg)
    if not _NAME_PATTERN.match(name):
        msg = f"Invalid package name: {name!r}"
        raise ValueError(msg)
    return name


class CuratedSet(BaseModel):
    """Ordered, duplicate-free set of curated package names.

    Attributes:
        packages: Package names in insertion order.

    Example:
        >>> curated = CuratedSet(packages=["git", "zsh"])
        >>> curated.add("curl")
        True
        >>> curated.add("git")
        False
        >>> curated.names
        ('git', 'zsh', 'curl')
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    packages: Annotated[
        list[PackageName],
        Field(default_factory=list, description="Curated package names"),
    ]

    @field_validator("packages")
    @classmethod
    def dedupe_packages(cls, value: list[str]) -> list[str]:
        """Validate names and drop duplicates, keeping the first occurrence."""
        seen: dict[str, None] = {}
        for name in value:
            seen.setdefault(validate_package_name(name), None)
        return list(seen)

    @classmethod
    def from_names(cls, names: Iterable[PackageName]) -> "CuratedSet":
        """Create a CuratedSet from any iterable of names."""
        return cls(packages=list(names))

    @property
    def names(self) -> tuple[PackageName, ...]:
        """Curated names in insertion order."""
        return tuple(self.packages)

    def add(self, name: PackageName) -> bool:
        """Add a package name.

        Args:
            name: Package name to add.

        Returns:
            True if the name was added, False if it was already listed.

        Raises:
            ValueError: If the name is malformed.
        """
        validate_package_name(name)
        if name in self.packages:
            return False
        self.packages.append(name)
        return True

    def remove(self, name: PackageName) -> bool:
        """Remove a package name.

        Removing a name that is not listed is a no-op.

        Args:
            name: Package name to remove.

        Returns:
            True if the name was removed, False if it was not listed.
        """
        if name not in self.packages:
            return False
        self.packages.remove(name)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self.packages

    def __len__(self) -> int:
        return len(self.packages)
