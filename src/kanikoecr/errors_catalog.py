"""Actionable error catalog for kaniko-ecr."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "registry_required": {
        "what": "registry must be specified",
        "next": "Set `--registry` (or PLUGIN_REGISTRY) to the ECR registry host.",
    },
    "repo_required": {
        "what": "repo must be specified",
        "next": "Set `--repo` (or PLUGIN_REPO) to the repository name inside the registry.",
    },
    "publish_repo_required": {
        "what": "repository name to publish image must be specified",
        "next": "Set `--repo`, or pass `--no-push` to only build the image.",
    },
    "dockerfile_not_found": {
        "what": "dockerfile does not exist at path: {path}",
        "next": "Check `--dockerfile` relative to the working directory.",
    },
    "env_file_not_found": {
        "what": "Env file not found: {path}",
        "next": "Fix PLUGIN_ENV_FILE or remove it to rely on the current environment.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
