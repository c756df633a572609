"""
Platform model

Platform family + deployment target, with numeric version ordering
("10.0" > "9.0").
"""

from dataclasses import dataclass, field
from enum import Enum

from packaging.version import InvalidVersion
from packaging.version import Version as _PackagingVersion


@dataclass(frozen=True, order=True)
class Version:
    """Deployment target version. Keeps the declared text for build settings."""

    release: _PackagingVersion
    text: str = field(compare=False)

    @classmethod
    def parse(cls, value: "str | Version") -> "Version":
        if isinstance(value, Version):
            return value
        text = str(value).strip()
        try:
            return cls(release=_PackagingVersion(text), text=text)
        except InvalidVersion as e:
            raise ValueError(f"Invalid version: {value!r}") from e

    def __str__(self) -> str:
        return self.text


class PlatformFamily(str, Enum):
    """Platform family"""

    IOS = "ios"
    OSX = "osx"

    @property
    def deployment_target_setting(self) -> str:
        return _DEPLOYMENT_TARGET_SETTINGS[self]

    @property
    def sdk_root(self) -> str:
        return _SDK_ROOTS[self]


_DEPLOYMENT_TARGET_SETTINGS = {
    PlatformFamily.IOS: "IPHONEOS_DEPLOYMENT_TARGET",
    PlatformFamily.OSX: "MACOSX_DEPLOYMENT_TARGET",
}

_SDK_ROOTS = {
    PlatformFamily.IOS: "iphoneos",
    PlatformFamily.OSX: "macosx",
}


@dataclass(frozen=True)
class Platform:
    family: PlatformFamily
    deployment_target: Version | None = None

    @classmethod
    def of(cls, family: "str | PlatformFamily", deployment_target: "str | Version | None" = None) -> "Platform":
        target = Version.parse(deployment_target) if deployment_target is not None else None
        return cls(family=PlatformFamily(family), deployment_target=target)

    def requires_legacy_archs(self, below: "str | Version") -> bool:
        """Old iOS deployment targets still need the fixed armv6/armv7 ARCHS list."""
        if self.family != PlatformFamily.IOS or self.deployment_target is None:
            return False
        return self.deployment_target < Version.parse(below)

    def __str__(self) -> str:
        if self.deployment_target is None:
            return self.family.value
        return f"{self.family.value} {self.deployment_target}"
