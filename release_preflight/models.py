"""Data models for release-preflight.

These Pydantic models represent the inputs to a preflight run and the
checklist built from them.
"""

from __future__ import annotations

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .versions import is_valid_version


class PreflightError(Exception):
    """A preflight check failed. The message is shown to the user verbatim."""


class PublishConfig(BaseModel):
    """The ``publishConfig`` block of a package.json."""

    registry: Optional[str] = None


class PackageManifest(BaseModel):
    """The parts of a package.json that the checks consume.

    Attributes:
        name: Package name as published on the registry.
        version: Current version string.
        private: Private packages are never published to the default registry.
        publish_config: Optional registry override.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str
    private: bool = False
    publish_config: Optional[PublishConfig] = Field(default=None, alias="publishConfig")

    @field_validator("version")
    @classmethod
    def check_semver(cls, value: str) -> str:
        if not is_valid_version(value):
            raise ValueError(f"`{value}` is not a valid semver version")
        return value

    @property
    def is_external_registry(self) -> bool:
        return self.publish_config is not None and isinstance(
            self.publish_config.registry, str
        )


class RunOptions(BaseModel):
    """Options for a single preflight run.

    Attributes:
        tag: Explicit dist-tag to publish under (required for pre-releases).
        tag_prefix: Overrides the git tag prefix npm would use.
    """

    tag: Optional[str] = None
    tag_prefix: Optional[str] = None


class PreflightContext(BaseModel):
    """State threaded through the checklist.

    ``new_version`` is written by the version validation check and read by
    the checks that come after it.
    """

    request: str
    manifest: PackageManifest
    options: RunOptions = Field(default_factory=RunOptions)
    new_version: Optional[str] = None

    def require_new_version(self) -> str:
        if self.new_version is None:
            raise RuntimeError("new_version read before the version was validated")
        return self.new_version


class Check(BaseModel):
    """One entry of the checklist.

    A check without a ``skip`` predicate always runs.
    """

    title: str
    action: Callable[[PreflightContext], None]
    skip: Optional[Callable[[PreflightContext], bool]] = None

    def should_skip(self, context: PreflightContext) -> bool:
        return self.skip is not None and bool(self.skip(context))


class Checklist(BaseModel):
    """An ordered list of checks plus the context they share."""

    context: PreflightContext
    checks: list[Check] = Field(default_factory=list)

    @property
    def titles(self) -> list[str]:
        return [check.title for check in self.checks]
