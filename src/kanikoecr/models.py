"""Shared domain models for kaniko-ecr."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from kanikoecr.constants import (
    DEFAULT_DIGEST_FILE,
    DEFAULT_REGION,
    DEFAULT_TAGS,
    REGISTRY_TYPE_ECR,
)


@dataclass(frozen=True)
class PluginConfig:
    """Build and registry settings captured once from flags and environment."""

    dockerfile: str = "Dockerfile"
    context: str = "."
    tags: Tuple[str, ...] = DEFAULT_TAGS
    args: Tuple[str, ...] = ()
    target: str = ""
    repo: str = ""
    create_repository: bool = False
    region: str = DEFAULT_REGION
    custom_labels: Tuple[str, ...] = ()
    registry: str = ""
    access_key: str = field(default="", repr=False)
    secret_key: str = field(default="", repr=False)
    snapshot_mode: str = ""
    lifecycle_policy: Optional[str] = None
    repository_policy: Optional[str] = None
    enable_cache: bool = False
    cache_repo: str = ""
    cache_ttl: int = 0
    artifact_file: str = ""
    no_push: bool = False
    verbosity: str = ""

    @property
    def needs_auth(self) -> bool:
        return not self.no_push or bool(self.access_key)

    @property
    def needs_repository(self) -> bool:
        return not self.no_push and self.create_repository


@dataclass(frozen=True)
class Build:
    """Input of a single kaniko executor run."""

    dockerfile: str
    context: str
    tags: Tuple[str, ...]
    args: Tuple[str, ...]
    target: str
    repo: str
    labels: Tuple[str, ...]
    snapshot_mode: str
    enable_cache: bool
    cache_repo: str
    cache_ttl: int
    digest_file: str = DEFAULT_DIGEST_FILE
    no_push: bool = False
    verbosity: str = ""


@dataclass(frozen=True)
class Artifact:
    """Metadata describing the images pushed by a build."""

    tags: Tuple[str, ...]
    repo: str
    registry: str
    artifact_file: str
    registry_type: str = REGISTRY_TYPE_ECR


@dataclass(frozen=True)
class BuildPlan:
    build: Build
    artifact: Artifact
