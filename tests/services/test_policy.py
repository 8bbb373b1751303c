import json
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from kanikoecr.errors import PluginError
from kanikoecr.services.filesystem import FileSystemService
from kanikoecr.services.policy import PolicyService

LIFECYCLE_POLICY = """{
  "rules": [
    {
      "rulePriority": 1,
      "description": "Expire untagged images",
      "selection": {"tagStatus": "untagged", "countType": "sinceImagePushed", "countUnit": "days", "countNumber": 14},
      "action": {"type": "expire"}
    }
  ]
}
"""


class RecordingFactory:
    def __init__(self):
        self.client = MagicMock()
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return self.client


def _service(dummy_logger, client_factory=None, private_client_factory=None):
    kwargs = {}
    if client_factory is not None:
        kwargs["client_factory"] = client_factory
    if private_client_factory is not None:
        kwargs["private_client_factory"] = private_client_factory
    return PolicyService(
        logger=dummy_logger,
        filesystem_service=FileSystemService(logger=dummy_logger),
        **kwargs,
    )


def test_read_policy_returns_text_verbatim(tmp_path, dummy_logger):
    text = '{ "Version" : "2012-10-17",\r\n  "Statement": [] }\n\n'
    policy_file = tmp_path / "policy.json"
    policy_file.write_bytes(text.encode("utf-8"))

    assert _service(dummy_logger).read_policy(str(policy_file)) == text


def test_read_policy_missing_file_is_fatal(tmp_path, dummy_logger):
    with pytest.raises(PluginError, match="failed to read policy file"):
        _service(dummy_logger).read_policy(str(tmp_path / "missing.json"))


def test_lifecycle_policy_always_uses_private_surface(tmp_path, dummy_logger):
    public_factory = RecordingFactory()
    private_factory = RecordingFactory()
    policy_file = tmp_path / "lifecycle.json"
    policy_file.write_text(LIFECYCLE_POLICY, encoding="utf-8")
    service = _service(dummy_logger, client_factory=public_factory, private_client_factory=private_factory)

    service.apply_lifecycle_policy("us-east-1", "app", str(policy_file))

    assert public_factory.calls == []
    assert private_factory.calls == [("us-east-1",)]
    private_factory.client.put_lifecycle_policy.assert_called_once_with("app", LIFECYCLE_POLICY)


def test_repository_policy_uses_selected_surface(tmp_path, dummy_logger):
    factory = RecordingFactory()
    policy_text = '{"Version": "2012-10-17", "Statement": []}'
    policy_file = tmp_path / "repository.json"
    policy_file.write_text(policy_text, encoding="utf-8")
    service = _service(dummy_logger, client_factory=factory)

    service.apply_repository_policy("us-east-1", "app", "public.ecr.aws/alias", str(policy_file))

    assert factory.calls == [("public.ecr.aws/alias", "us-east-1")]
    factory.client.set_repository_policy.assert_called_once_with("app", policy_text)


def test_repository_policy_api_error_is_fatal(dummy_logger):
    factory = RecordingFactory()
    factory.client.set_repository_policy.side_effect = ClientError(
        {"Error": {"Code": "RepositoryNotFoundException", "Message": "missing"}},
        "SetRepositoryPolicy",
    )
    service = _service(dummy_logger, client_factory=factory)

    with pytest.raises(PluginError, match="error uploading ECR repository policy"):
        service.upload_repository_policy("us-east-1", "app", "123.dkr.ecr.us-east-1.amazonaws.com", "{}")


def test_lifecycle_policy_api_error_is_fatal(dummy_logger):
    factory = RecordingFactory()
    factory.client.put_lifecycle_policy.side_effect = ClientError(
        {"Error": {"Code": "RepositoryNotFoundException", "Message": "missing"}},
        "PutLifecyclePolicy",
    )
    service = _service(dummy_logger, private_client_factory=factory)

    with pytest.raises(PluginError, match="error uploading ECR lifecycle policy"):
        service.upload_lifecycle_policy("us-east-1", "app", LIFECYCLE_POLICY)


@mock_aws
def test_lifecycle_policy_reaches_private_ecr(tmp_path, dummy_logger):
    ecr = boto3.client("ecr", region_name="us-east-1")
    ecr.create_repository(repositoryName="app")
    policy_file = tmp_path / "lifecycle.json"
    policy_file.write_text(LIFECYCLE_POLICY, encoding="utf-8")

    _service(dummy_logger).apply_lifecycle_policy("us-east-1", "app", str(policy_file))

    stored = ecr.get_lifecycle_policy(repositoryName="app")["lifecyclePolicyText"]
    assert json.loads(stored) == json.loads(LIFECYCLE_POLICY)
