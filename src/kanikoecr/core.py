import logging
import os

from rich.console import Console

from .constants import DEFAULT_DIGEST_FILE, DOCKER_CONFIG_PATH, KANIKO_EXECUTOR
from .errors import PluginError
from .models import BuildPlan, PluginConfig
from .services.artifact import ArtifactService
from .services.command_runner import CommandRunner
from .services.credentials import CredentialService
from .services.filesystem import FileSystemService
from .services.kaniko import KanikoService, build_plan
from .services.policy import PolicyService
from .services.registry import PrivateRegistryClient, RepositoryService, registry_client_for

console = Console()
logger = logging.getLogger("kanikoecr")


class KanikoECRPlugin:
    def __init__(
        self,
        config: PluginConfig,
        docker_config_path: str = DOCKER_CONFIG_PATH,
        digest_file: str = DEFAULT_DIGEST_FILE,
        executor: str = KANIKO_EXECUTOR,
        client_factory=registry_client_for,
        private_client_factory=PrivateRegistryClient,
        environ=None,
    ):
        self.config = config
        self.digest_file = digest_file
        self.environ = os.environ if environ is None else environ
        self.current_step_name = None

        self.filesystem_service = FileSystemService(logger=logger)
        self.command_runner = CommandRunner(logger=logger)
        self.credential_service = CredentialService(
            logger=logger,
            filesystem_service=self.filesystem_service,
            config_path=docker_config_path,
            environ=self.environ,
        )
        self.repository_service = RepositoryService(logger=logger, client_factory=client_factory)
        self.policy_service = PolicyService(
            logger=logger,
            filesystem_service=self.filesystem_service,
            client_factory=client_factory,
            private_client_factory=private_client_factory,
        )
        self.artifact_service = ArtifactService(logger=logger, filesystem_service=self.filesystem_service)
        self.kaniko_service = KanikoService(
            logger=logger,
            console=console,
            command_runner=self.command_runner,
            artifact_service=self.artifact_service,
            filesystem_service=self.filesystem_service,
            executor=executor,
        )

    def _run_step(self, name: str, callback, *args, **kwargs):
        logger.debug("Starting step: %s", name)
        self.current_step_name = name
        result = callback(*args, **kwargs)
        self.current_step_name = None
        logger.debug("Finished step: %s", name)
        return result

    def setup_auth(self):
        console.print("[blue]Configuring ECR credentials...[/blue]")
        self.credential_service.setup_ecr_auth(
            self.config.access_key,
            self.config.secret_key,
            self.config.registry,
        )

    def create_repository(self):
        console.print(f"[blue]Ensuring repository '{self.config.repo}' exists...[/blue]")
        self.repository_service.create_repository(
            self.config.region,
            self.config.repo,
            self.config.registry,
        )

    def upload_lifecycle_policy(self):
        console.print("[blue]Uploading lifecycle policy...[/blue]")
        self.policy_service.apply_lifecycle_policy(
            self.config.region,
            self.config.repo,
            self.config.lifecycle_policy,
        )

    def upload_repository_policy(self):
        console.print("[blue]Uploading repository policy...[/blue]")
        self.policy_service.apply_repository_policy(
            self.config.region,
            self.config.repo,
            self.config.registry,
            self.config.repository_policy,
        )

    def build_plan(self) -> BuildPlan:
        return build_plan(self.config, digest_file=self.digest_file)

    def build(self):
        self.kaniko_service.execute(self.build_plan())

    def run(self) -> int:
        try:
            logger.info("Starting kaniko-ecr...")
            logger.debug("Configuration: %s", self.config)

            # Auth only when pushing or credentials are defined.
            if self.config.needs_auth:
                self._run_step("setup_auth", self.setup_auth)
            else:
                logger.info("Skipping ECR authentication: push disabled and no access key given.")

            if self.config.needs_repository:
                self._run_step("create_repository", self.create_repository)

            if self.config.lifecycle_policy is not None:
                self._run_step("upload_lifecycle_policy", self.upload_lifecycle_policy)

            if self.config.repository_policy is not None:
                self._run_step("upload_repository_policy", self.upload_repository_policy)

            self._run_step("build", self.build)
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except PluginError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error("Step '%s' failed: %s", self.current_step_name or "run", exc)
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
