import logging
import os

import click
from rich.logging import RichHandler

from . import __version__
from .constants import DEFAULT_REGION, DEFAULT_TAGS, ENV_FILE_ENV, TAGS_FILE, VERBOSITY_LEVELS
from .core import KanikoECRPlugin, PluginError
from .models import PluginConfig
from .services.config_loader import ConfigLoader


class CommaSeparated(click.ParamType):
    """String list whose environment variable form is comma separated."""

    name = "list"
    envvar_list_splitter = ","

    def convert(self, value, param, ctx):
        return value.strip()


COMMA_LIST = CommaSeparated()


def _clean_list(values):
    return tuple(value for value in values if value)


def _read_tags_file(path: str = TAGS_FILE):
    if not os.path.isfile(path):
        return ()
    with open(path, "r", encoding="utf-8") as file_obj:
        return _clean_list(tag.strip() for tag in file_obj.read().split(","))


def _resolve_tags(ctx, param, value):
    tags = _clean_list(value)
    if tags:
        return tags
    return _read_tags_file() or DEFAULT_TAGS


def _resolve_list(ctx, param, value):
    return _clean_list(value)


def _load_env_file(ctx, param, value):
    try:
        applied = ConfigLoader().load(value)
    except PluginError as exc:
        raise click.ClickException(str(exc)) from exc
    if applied:
        logging.getLogger("kanikoecr").debug("Loaded %s variables from %s", len(applied), value)
    return value


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.version_option(__version__, prog_name="kaniko-ecr")
@click.option(
    "--env-file",
    envvar=ENV_FILE_ENV,
    is_eager=True,
    expose_value=False,
    callback=_load_env_file,
    type=click.Path(),
    help="Dotenv file loaded into the environment before the other options are read.",
)
@click.option("--dockerfile", envvar="PLUGIN_DOCKERFILE", default="Dockerfile", show_default=True, help="build dockerfile")
@click.option("--context", envvar="PLUGIN_CONTEXT", default=".", show_default=True, help="build context")
@click.option(
    "--tags",
    envvar="PLUGIN_TAGS",
    type=COMMA_LIST,
    multiple=True,
    callback=_resolve_tags,
    help="build tags. Defaults to the contents of .tags, or 'latest'.",
)
@click.option("--args", envvar="PLUGIN_BUILD_ARGS", type=COMMA_LIST, multiple=True, callback=_resolve_list, help="build args")
@click.option("--target", envvar="PLUGIN_TARGET", default="", help="build target")
@click.option("--repo", envvar="PLUGIN_REPO", default="", help="docker repository")
@click.option("--create-repository", envvar="PLUGIN_CREATE_REPOSITORY", is_flag=True, help="create ECR repository")
@click.option("--region", envvar="PLUGIN_REGION", default=DEFAULT_REGION, show_default=True, help="AWS region")
@click.option(
    "--custom-labels",
    envvar="PLUGIN_CUSTOM_LABELS",
    type=COMMA_LIST,
    multiple=True,
    callback=_resolve_list,
    help="additional k=v labels",
)
@click.option("--registry", envvar="PLUGIN_REGISTRY", default="", help="ECR registry")
@click.option("--access-key", envvar="PLUGIN_ACCESS_KEY", default="", help="ECR access key")
@click.option("--secret-key", envvar="PLUGIN_SECRET_KEY", default="", help="ECR secret key")
@click.option(
    "--snapshot-mode",
    envvar="PLUGIN_SNAPSHOT_MODE",
    default="",
    help="Specify one of full, redo or time as snapshot mode",
)
@click.option("--lifecycle-policy", envvar="PLUGIN_LIFECYCLE_POLICY", default=None, help="Path to lifecycle policy file")
@click.option("--repository-policy", envvar="PLUGIN_REPOSITORY_POLICY", default=None, help="Path to repository policy file")
@click.option("--enable-cache", envvar="PLUGIN_ENABLE_CACHE", is_flag=True, help="Set this flag to opt into caching with kaniko")
@click.option(
    "--cache-repo",
    envvar="PLUGIN_CACHE_REPO",
    default="",
    help="Remote repository used to store cached layers. It should be present in the registry. "
    "enable-cache needs to be set to use this flag.",
)
@click.option("--cache-ttl", envvar="PLUGIN_CACHE_TTL", type=int, default=0, help="Cache timeout in hours. Defaults to two weeks.")
@click.option(
    "--artifact-file",
    envvar="PLUGIN_ARTIFACT_FILE",
    default="",
    help="Artifact file generated by the plugin, listing the docker images it uploaded.",
)
@click.option(
    "--no-push",
    envvar="PLUGIN_NO_PUSH",
    is_flag=True,
    help="Set this flag if you only want to build the image, without pushing to a registry",
)
@click.option(
    "--verbosity",
    envvar="PLUGIN_VERBOSITY",
    type=click.Choice(VERBOSITY_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level for kaniko. Defaults to info.",
)
def main(
    dockerfile,
    context,
    tags,
    args,
    target,
    repo,
    create_repository,
    region,
    custom_labels,
    registry,
    access_key,
    secret_key,
    snapshot_mode,
    lifecycle_policy,
    repository_policy,
    enable_cache,
    cache_repo,
    cache_ttl,
    artifact_file,
    no_push,
    verbosity,
):
    """Build an image with kaniko and push it to AWS ECR."""
    logger = logging.getLogger("kanikoecr")

    verbosity = (verbosity or "").lower()
    if verbosity in ("debug", "trace"):
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    config = PluginConfig(
        dockerfile=dockerfile,
        context=context,
        tags=tags,
        args=args,
        target=target,
        repo=repo,
        create_repository=create_repository,
        region=region,
        custom_labels=custom_labels,
        registry=registry,
        access_key=access_key,
        secret_key=secret_key,
        snapshot_mode=snapshot_mode,
        lifecycle_policy=lifecycle_policy,
        repository_policy=repository_policy,
        enable_cache=enable_cache,
        cache_repo=cache_repo,
        cache_ttl=cache_ttl,
        artifact_file=artifact_file,
        no_push=no_push,
        verbosity=verbosity,
    )

    plugin = KanikoECRPlugin(config=config)
    raise SystemExit(plugin.run())


def run():
    main(prog_name="kaniko-ecr")


if __name__ == "__main__":
    run()
