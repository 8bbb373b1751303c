"""Kaniko executor invocation for kaniko-ecr."""

import os
from typing import List

from kanikoecr.constants import DEFAULT_DIGEST_FILE, KANIKO_EXECUTOR
from kanikoecr.errors import PluginError
from kanikoecr.errors_catalog import actionable_error
from kanikoecr.models import Artifact, Build, BuildPlan, PluginConfig


def qualified_repo(registry: str, repo: str) -> str:
    return f"{registry}/{repo}"


def build_plan(config: PluginConfig, digest_file: str = DEFAULT_DIGEST_FILE) -> BuildPlan:
    """Maps the plugin configuration onto the executor build and artifact inputs."""
    build = Build(
        dockerfile=config.dockerfile,
        context=config.context,
        tags=tuple(config.tags),
        args=tuple(config.args),
        target=config.target,
        repo=qualified_repo(config.registry, config.repo),
        labels=tuple(config.custom_labels),
        snapshot_mode=config.snapshot_mode,
        enable_cache=config.enable_cache,
        cache_repo=qualified_repo(config.registry, config.cache_repo),
        cache_ttl=config.cache_ttl,
        digest_file=digest_file,
        no_push=config.no_push,
        verbosity=config.verbosity,
    )
    artifact = Artifact(
        tags=tuple(config.tags),
        repo=config.repo,
        registry=config.registry,
        artifact_file=config.artifact_file,
    )
    return BuildPlan(build=build, artifact=artifact)


class KanikoService:
    """Builds the executor command line, runs it and records the pushed images."""

    def __init__(
        self,
        logger,
        console,
        command_runner,
        artifact_service,
        filesystem_service,
        executor: str = KANIKO_EXECUTOR,
    ):
        self.logger = logger
        self.console = console
        self.filesystem_service = filesystem_service
        self.command_runner = command_runner
        self.artifact_service = artifact_service
        self.executor = executor

    def build_args(self, build: Build) -> List[str]:
        args = [
            f"--dockerfile={build.dockerfile}",
            f"--context=dir://{build.context}",
        ]

        if not build.no_push:
            for tag in build.tags:
                args.append(f"--destination={build.repo}:{tag}")

        for build_arg in build.args:
            args.append(f"--build-arg={build_arg}")

        for label in build.labels:
            args.append(f"--label={label}")

        if build.target:
            args.append(f"--target={build.target}")

        if build.enable_cache:
            args.append("--cache=true")
            if build.cache_repo:
                args.append(f"--cache-repo={build.cache_repo}")

        if build.cache_ttl:
            args.append(f"--cache-ttl={build.cache_ttl}h")

        if build.digest_file:
            args.append(f"--digest-file={build.digest_file}")

        if build.no_push:
            args.append("--no-push")

        if build.verbosity:
            args.append(f"--verbosity={build.verbosity}")

        if build.snapshot_mode:
            args.append(f"--snapshotMode={build.snapshot_mode}")

        return args

    def validate(self, plan: BuildPlan):
        if not plan.build.no_push and not plan.artifact.repo:
            raise PluginError(actionable_error("publish_repo_required"))

        if not os.path.exists(plan.build.dockerfile):
            raise PluginError(actionable_error("dockerfile_not_found", path=plan.build.dockerfile))

    def execute(self, plan: BuildPlan):
        self.validate(plan)

        if plan.build.no_push:
            self.console.print("[blue]Building image without pushing...[/blue]")
        else:
            self.console.print(f"[blue]Building and pushing {plan.build.repo}...[/blue]")

        self.command_runner.run([self.executor] + self.build_args(plan.build))
        self.console.print("[green]Kaniko build finished.[/green]")

        if plan.build.digest_file and plan.artifact.artifact_file:
            self.write_artifact(plan)

    def write_artifact(self, plan: BuildPlan) -> bool:
        try:
            digest = self.filesystem_service.read_text(plan.build.digest_file)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning(
                "Unable to read digest file contents at %s: %s",
                plan.build.digest_file,
                exc,
            )
            return False

        return self.artifact_service.write(plan.artifact, digest)
