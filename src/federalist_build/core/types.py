from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from federalist_build.core.constants import EMPTY_BASE_URL, Engine, StepKind


class Site(BaseModel):
    """A site backed by a source repository.

    ``domain`` is the custom domain serving the default branch, if any.
    ``config`` is free-form generator configuration appended verbatim to the
    generated Jekyll config file.
    """

    owner: str
    repository: str
    default_branch: str = "main"
    domain: str | None = None
    config: str = ""
    engine: Engine = Engine.STATIC


class Credential(BaseModel):
    access_token: str = Field(repr=False, exclude=True)


class User(BaseModel):
    id: str
    credential: Credential | None = Field(default=None, exclude=True)
    """Filled in by the pipeline from the credential store. Never serialized."""


class BuildRequest(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    site: Site
    branch: str
    user: User

    @property
    def is_default_branch(self) -> bool:
        """Production build when building the site's default branch."""
        return self.branch == self.site.default_branch


class TokenSet(BaseModel):
    """Substitution values for one pipeline run. Never persisted."""

    model_config = ConfigDict(frozen=True)

    branch: str
    branch_suffix: str
    root_segment: str
    owner: str
    repository: str
    access_token: str = Field(repr=False, exclude=True)
    base_url: str
    source_path: str
    destination_path: str
    publish_path: str
    generator_config: str = ""
    path_separator: str = "/"

    @property
    def base_url_value(self) -> str:
        """``base_url`` as a literal argument value (sentinel becomes ``""``)."""
        return "" if self.base_url == EMPTY_BASE_URL else self.base_url

    @property
    def publish_prefix(self) -> str:
        return f"{self.root_segment}/{self.owner}/{self.repository}{self.branch_suffix}"

    def as_mapping(self) -> dict[str, str]:
        """Placeholder names usable as ``${name}`` in command templates."""
        return {
            "branch": self.branch,
            "branchSuffix": self.branch_suffix,
            "rootSegment": self.root_segment,
            "owner": self.owner,
            "repository": self.repository,
            "accessToken": self.access_token,
            "baseUrl": self.base_url,
            "baseUrlValue": self.base_url_value,
            "sourcePath": self.source_path,
            "destinationPath": self.destination_path,
            "publishPath": self.publish_path,
            "generatorConfig": self.generator_config,
            "sep": self.path_separator,
        }


class ProcessResult(BaseModel):
    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepRecord(BaseModel):
    name: str
    kind: StepKind
    success: bool
    duration_ms: int = 0


class SyncDescriptor(BaseModel):
    """What the remote synchronisation service should upload, and where."""

    prefix: str
    directory: str


@dataclass
class BuildResult:
    """Terminal value of a build-and-publish run.

    ``error`` is the first failure (credential lookup, build step or publish).
    Filesystem side effects of steps that already ran are left in place.
    """

    request: BuildRequest
    error: Exception | None = None
    steps: list[StepRecord] = field(default_factory=list)
    published: bool = False
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None
