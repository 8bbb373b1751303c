"""Lifecycle and repository policy uploads."""

from botocore.exceptions import BotoCoreError, ClientError

from kanikoecr.errors import PluginError
from kanikoecr.services.registry import PrivateRegistryClient, registry_client_for


class PolicyService:
    """Reads policy documents from disk and forwards them to ECR unchanged."""

    def __init__(
        self,
        logger,
        filesystem_service,
        client_factory=registry_client_for,
        private_client_factory=PrivateRegistryClient,
    ):
        self.logger = logger
        self.filesystem_service = filesystem_service
        self.client_factory = client_factory
        self.private_client_factory = private_client_factory

    def read_policy(self, path: str) -> str:
        try:
            return self.filesystem_service.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise PluginError(f"failed to read policy file '{path}': {exc}") from exc

    def upload_lifecycle_policy(self, region: str, repo: str, policy_text: str):
        # ecr-public has no lifecycle policies; the private API is used regardless of registry.
        try:
            client = self.private_client_factory(region)
            client.put_lifecycle_policy(repo, policy_text)
        except (ClientError, BotoCoreError) as exc:
            raise PluginError(f"error uploading ECR lifecycle policy: {exc}") from exc
        self.logger.info("Uploaded lifecycle policy for '%s'.", repo)

    def upload_repository_policy(self, region: str, repo: str, registry: str, policy_text: str):
        try:
            client = self.client_factory(registry, region)
            client.set_repository_policy(repo, policy_text)
        except (ClientError, BotoCoreError) as exc:
            raise PluginError(f"error uploading ECR repository policy: {exc}") from exc
        self.logger.info("Uploaded repository policy for '%s'.", repo)

    def apply_lifecycle_policy(self, region: str, repo: str, path: str):
        self.upload_lifecycle_policy(region, repo, self.read_policy(path))

    def apply_repository_policy(self, region: str, repo: str, registry: str, path: str):
        self.upload_repository_policy(region, repo, registry, self.read_policy(path))
