import os

import pytest

PLUGIN_ENV_KEYS = [
    "PLUGIN_ENV_FILE",
    "PLUGIN_DOCKERFILE",
    "PLUGIN_CONTEXT",
    "PLUGIN_TAGS",
    "PLUGIN_BUILD_ARGS",
    "PLUGIN_TARGET",
    "PLUGIN_REPO",
    "PLUGIN_CREATE_REPOSITORY",
    "PLUGIN_REGION",
    "PLUGIN_CUSTOM_LABELS",
    "PLUGIN_REGISTRY",
    "PLUGIN_ACCESS_KEY",
    "PLUGIN_SECRET_KEY",
    "PLUGIN_SNAPSHOT_MODE",
    "PLUGIN_LIFECYCLE_POLICY",
    "PLUGIN_REPOSITORY_POLICY",
    "PLUGIN_ENABLE_CACHE",
    "PLUGIN_CACHE_REPO",
    "PLUGIN_CACHE_TTL",
    "PLUGIN_ARTIFACT_FILE",
    "PLUGIN_NO_PUSH",
    "PLUGIN_VERBOSITY",
]


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS credentials for moto; keeps real accounts out of reach."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def clean_plugin_env(monkeypatch):
    """Removes PLUGIN_* variables and restores the original state afterwards."""
    for key in PLUGIN_ENV_KEYS:
        monkeypatch.setenv(key, os.environ.get(key, ""))
        monkeypatch.delenv(key)
    return monkeypatch


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None

    def info(self, *_args, **_kwargs):
        return None

    def warning(self, *_args, **_kwargs):
        return None

    def error(self, *_args, **_kwargs):
        return None


class DummyConsole:
    def print(self, *_args, **_kwargs):
        return None


@pytest.fixture
def dummy_logger():
    return DummyLogger()


@pytest.fixture
def dummy_console():
    return DummyConsole()
