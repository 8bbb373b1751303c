"""Docker credential-helper setup for ECR."""

import json
import os

from kanikoecr.constants import (
    ACCESS_KEY_ENV,
    CREDENTIAL_HELPER,
    DOCKER_CONFIG_PATH,
    ECR_PUBLIC_DOMAIN,
    SECRET_KEY_ENV,
)
from kanikoecr.errors import PluginError
from kanikoecr.errors_catalog import actionable_error


class CredentialService:
    """Exports static AWS keys and points kaniko at the ecr-login helper."""

    def __init__(self, logger, filesystem_service, config_path: str = DOCKER_CONFIG_PATH, environ=None):
        self.logger = logger
        self.filesystem_service = filesystem_service
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ

    def build_docker_config(self, registry: str) -> str:
        return json.dumps(
            {
                "credStore": CREDENTIAL_HELPER,
                "credHelpers": {
                    ECR_PUBLIC_DOMAIN: CREDENTIAL_HELPER,
                    registry: CREDENTIAL_HELPER,
                },
            }
        )

    def setup_ecr_auth(self, access_key: str, secret_key: str, registry: str):
        if not registry:
            raise PluginError(actionable_error("registry_required"))

        # Without static keys the default chain (IAM role, profile) is used.
        if access_key and secret_key:
            self._export(ACCESS_KEY_ENV, access_key)
            self._export(SECRET_KEY_ENV, secret_key)
            self.logger.debug("Exported static AWS credentials for %s", registry)

        try:
            self.filesystem_service.write_text(self.config_path, self.build_docker_config(registry))
        except OSError as exc:
            raise PluginError(f"failed to create docker config file: {exc}") from exc

        self.logger.info("Docker credential helper configured at %s", self.config_path)

    def _export(self, name: str, value: str):
        try:
            self.environ[name] = value
        except (OSError, ValueError) as exc:
            raise PluginError(f"failed to set {name} environment variable: {exc}") from exc
