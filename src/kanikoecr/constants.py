"""Fixed names, paths and literals used by kaniko-ecr."""

ACCESS_KEY_ENV = "AWS_ACCESS_KEY_ID"
SECRET_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
ENV_FILE_ENV = "PLUGIN_ENV_FILE"

ECR_PUBLIC_DOMAIN = "public.ecr.aws"
CREDENTIAL_HELPER = "ecr-login"
REPOSITORY_EXISTS_CODE = "RepositoryAlreadyExistsException"

DEFAULT_REGION = "us-east-1"
DEFAULT_TAGS = ("latest",)
TAGS_FILE = ".tags"

KANIKO_EXECUTOR = "/kaniko/executor"
DOCKER_CONFIG_PATH = "/kaniko/.docker/config.json"
DEFAULT_DIGEST_FILE = "/kaniko/digest-file"

REGISTRY_TYPE_ECR = "ECR"
ARTIFACT_KIND = "docker/v1"

VERBOSITY_LEVELS = ["panic", "fatal", "error", "warn", "info", "debug", "trace"]

FILE_MODE = 0o644
