"""ECR registry API surfaces for kaniko-ecr.

Private registries (``<account>.dkr.ecr.<region>.amazonaws.com``) are served by
the ``ecr`` API and public ones (``public.ecr.aws/<alias>``) by ``ecr-public``.
Both expose the same operations under the same names, so callers pick one
client up front and never branch again.
"""

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from kanikoecr.constants import ECR_PUBLIC_DOMAIN, REPOSITORY_EXISTS_CODE
from kanikoecr.errors import PluginError
from kanikoecr.errors_catalog import actionable_error


def is_registry_public(registry: str) -> bool:
    return registry.startswith(ECR_PUBLIC_DOMAIN)


class RegistryClient:
    """Operations shared by the private and public ECR APIs."""

    service_name = ""

    def __init__(self, region: str, session_factory=boto3.session.Session):
        self.region = region
        self.session = session_factory(region_name=region)
        self.client = self.session.client(self.service_name)

    def create_repository(self, repository_name: str):
        return self.client.create_repository(repositoryName=repository_name)

    def set_repository_policy(self, repository_name: str, policy_text: str):
        return self.client.set_repository_policy(
            repositoryName=repository_name,
            policyText=policy_text,
        )


class PrivateRegistryClient(RegistryClient):
    service_name = "ecr"

    def put_lifecycle_policy(self, repository_name: str, policy_text: str):
        return self.client.put_lifecycle_policy(
            repositoryName=repository_name,
            lifecyclePolicyText=policy_text,
        )


class PublicRegistryClient(RegistryClient):
    service_name = "ecr-public"


def registry_client_for(registry: str, region: str, session_factory=boto3.session.Session) -> RegistryClient:
    if is_registry_public(registry):
        return PublicRegistryClient(region, session_factory=session_factory)
    return PrivateRegistryClient(region, session_factory=session_factory)


def error_code(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


class RepositoryService:
    """Idempotent repository provisioning."""

    def __init__(self, logger, client_factory=registry_client_for):
        self.logger = logger
        self.client_factory = client_factory

    def create_repository(self, region: str, repo: str, registry: str):
        if not registry:
            raise PluginError(actionable_error("registry_required"))
        if not repo:
            raise PluginError(actionable_error("repo_required"))

        try:
            client = self.client_factory(registry, region)
            client.create_repository(repo)
        except ClientError as exc:
            if error_code(exc) != REPOSITORY_EXISTS_CODE:
                raise PluginError(f"failed to create repository: {exc}") from exc
            self.logger.info("Repository '%s' already exists in %s.", repo, registry)
            return False
        except BotoCoreError as exc:
            raise PluginError(f"failed to create repository: {exc}") from exc

        self.logger.info("Created repository '%s' in %s.", repo, registry)
        return True
