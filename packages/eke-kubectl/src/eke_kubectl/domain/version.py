"""Semantic version value object.

kubectl releases, cluster ``gitVersion`` strings and the upstream
``stable.txt`` pointer all use ``v<major>.<minor>.<patch>[-<prerelease>]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from eke_kubectl.domain.exceptions import VersionParseError

_IDENTIFIER = re.compile(r"^[0-9A-Za-z-]+$")
_NUMERIC = re.compile(r"^[0-9]+$")


@total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """Immutable semantic version with total ordering.

    Ordering compares major, minor and patch numerically, then prerelease:
    a version without a prerelease sorts above the same version with one
    (``1.21.0-rc.1 < 1.21.0``). Prerelease identifiers compare per semver 2.0,
    numeric identifiers numerically and below alphanumeric ones.

    Attributes:
        major: Major version number (non-negative).
        minor: Minor version number (non-negative).
        patch: Patch version number (non-negative).
        prerelease: Optional prerelease tag without the leading dash.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __post_init__(self) -> None:
        """Validate version components."""
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise VersionParseError(
                f"Version components must be non-negative, got: "
                f"{self.major}.{self.minor}.{self.patch}"
            )
        if self.prerelease is not None:
            self._validate_prerelease(self.prerelease)

    @staticmethod
    def _validate_prerelease(prerelease: str) -> None:
        identifiers = prerelease.split(".")
        leading_zero = any(
            _NUMERIC.match(ident) and len(ident) > 1 and ident.startswith("0")
            for ident in identifiers
        )
        if leading_zero or not all(_IDENTIFIER.match(ident) for ident in identifiers):
            raise VersionParseError(
                f"Invalid prerelease tag: {prerelease!r}", version_string=prerelease
            )

    @classmethod
    def parse(cls, version_string: str) -> SemanticVersion:
        """Parse a version from string format.

        Accepts versions like ``1.20.1``, ``v1.20.1``, ``v1.21.0-rc.0`` and
        ``v1.21.3+k3s1`` (build metadata is dropped).

        Raises:
            VersionParseError: If the format is invalid.
        """
        return cls._parse(version_string, tolerant=False)

    @classmethod
    def parse_tolerant(cls, version_string: str) -> SemanticVersion:
        """Parse a version, inferring missing minor/patch components as 0.

        ``1.20`` becomes ``1.20.0``. Used where users type versions by hand.
        """
        return cls._parse(version_string, tolerant=True)

    @classmethod
    def _parse(cls, version_string: str, tolerant: bool) -> SemanticVersion:
        if not isinstance(version_string, str):
            raise VersionParseError(
                f"Version must be a string, got: {version_string!r}"
            )

        version = version_string.strip()
        if version.startswith("v"):
            version = version[1:]

        version, plus, build = version.partition("+")
        if plus and not build:
            raise VersionParseError(
                f"Empty build metadata in version: {version_string!r}",
                version_string=version_string,
            )
        core, dash, prerelease = version.partition("-")
        if dash and not prerelease:
            raise VersionParseError(
                f"Empty prerelease tag in version: {version_string!r}",
                version_string=version_string,
            )

        parts = core.split(".")
        if tolerant and 1 <= len(parts) < 3:
            parts += ["0"] * (3 - len(parts))
        if len(parts) != 3:
            raise VersionParseError(
                f"Invalid version format, expected 'X.Y.Z', got: {version_string!r}",
                version_string=version_string,
            )
        if not all(_NUMERIC.match(part) for part in parts):
            raise VersionParseError(
                f"Invalid version format, expected numeric components, got: {version_string!r}",
                version_string=version_string,
            )

        major, minor, patch = (int(part) for part in parts)
        try:
            return cls(major=major, minor=minor, patch=patch, prerelease=prerelease or None)
        except VersionParseError as e:
            raise VersionParseError(str(e), version_string=version_string) from e

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def tag(self) -> str:
        """Upstream release tag, e.g. ``v1.20.1``."""
        return f"v{self}"

    def _sort_key(self) -> tuple:
        if self.prerelease is None:
            pre: tuple = (1,)
        else:
            pre = (
                0,
                tuple(
                    (0, int(ident), "") if _NUMERIC.match(ident) else (1, 0, ident)
                    for ident in self.prerelease.split(".")
                ),
            )
        return (self.major, self.minor, self.patch, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{self.prerelease}"
        return core
