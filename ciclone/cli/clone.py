"""cli commands to prepare a build workspace"""

import sys
from functools import wraps
from pathlib import Path

import click
from pydantic import ValidationError

from ciclone.cli.error_formatting import pretty_print_clone_error
from ciclone.cli.utils.logging import logger
from ciclone.config import ConfigAccessor
from ciclone.constants import DEFAULT_EVENT, DEFAULT_REF
from ciclone.exceptions import CloneError
from ciclone.git import CloneRunner, check_preconditions, clone_workspace
from ciclone.model import BuildContext, CloneConfig, NetrcCredentials
from ciclone.utils import parse_backoff, parse_submodule_overrides

_OPTIONS = [
    click.option(
        "--remote",
        envvar="CI_REMOTE_URL",
        required=True,
        help="Git remote url.",
    ),
    click.option(
        "--path",
        envvar="CI_WORKSPACE",
        required=True,
        type=click.Path(file_okay=False, path_type=Path),
        help="Workspace directory to clone into.",
    ),
    click.option("--sha", envvar="CI_COMMIT_SHA", default="", help="Commit sha."),
    click.option(
        "--ref",
        envvar="CI_COMMIT_REF",
        default=DEFAULT_REF,
        show_default=True,
        help="Commit ref.",
    ),
    click.option("--branch", envvar="CI_COMMIT_BRANCH", default=None, help="Branch."),
    click.option(
        "--event",
        envvar="CI_BUILD_EVENT",
        default=DEFAULT_EVENT,
        show_default=True,
        help="Build event (push, pull_request, tag).",
    ),
    click.option(
        "--number", envvar="CI_BUILD_NUMBER", type=int, default=None, help="Build number."
    ),
    click.option("--netrc-machine", envvar="CI_NETRC_MACHINE", default=""),
    click.option("--netrc-username", envvar="CI_NETRC_USERNAME", default=""),
    click.option("--netrc-password", envvar="CI_NETRC_PASSWORD", default=""),
    click.option(
        "--ssh-key", envvar="CI_SSH_KEY", default="", help="Private SSH key material."
    ),
    click.option(
        "--depth",
        envvar="PLUGIN_DEPTH",
        type=int,
        default=None,
        help="Clone depth, 0 for full history.",
    ),
    click.option(
        "--recursive/--no-recursive",
        envvar="PLUGIN_RECURSIVE",
        default=False,
        help="Initialize submodules recursively.",
    ),
    click.option(
        "--tags/--no-tags", envvar="PLUGIN_TAGS", default=False, help="Fetch tags."
    ),
    click.option(
        "--skip-verify",
        envvar="PLUGIN_SKIP_VERIFY",
        is_flag=True,
        default=False,
        help="Skip TLS verification.",
    ),
    click.option(
        "--submodule-override",
        envvar="PLUGIN_SUBMODULE_OVERRIDE",
        default="",
        help='JSON map of submodule overrides, e.g. \'{"lib": "https://..."}\'.',
    ),
    click.option(
        "--submodule-update-remote",
        envvar="PLUGIN_SUBMODULE_UPDATE_REMOTE",
        is_flag=True,
        default=False,
        help="Update submodules to their remote tracking branch.",
    ),
    click.option(
        "--attempts",
        envvar="PLUGIN_ATTEMPTS",
        type=int,
        default=None,
        help="Full clone attempts, wiping the workspace in between.",
    ),
    click.option(
        "--backoff",
        envvar="PLUGIN_BACKOFF",
        default=None,
        help="A `human friendly` delay between retries of a failed fetch. Example: 5s, 1m",
    ),
    click.option(
        "--backoff-attempts",
        envvar="PLUGIN_BACKOFF_ATTEMPTS",
        type=int,
        default=None,
        help="Retries of a fetch whose remote ref is not yet available.",
    ),
]


def clone_options(cmd):
    """Decorator adding the workspace, ref and retry options to a command"""
    for option in reversed(_OPTIONS):
        cmd = option(cmd)
    return cmd


def load_settings(config: ConfigAccessor, **options):
    """
    Build the validated inputs of a clone from command line options.

    Options left unset fall back to the configuration file, then to built-in defaults.

    Returns:
        Tuple of (BuildContext, CloneConfig, NetrcCredentials)

    Raises:
        click.UsageError: If any value is invalid
    """

    def _default(value, section, key):
        return value if value is not None else config.default(section, key)

    try:
        context = BuildContext(
            remote=options["remote"],
            path=options["path"],
            event=options["event"],
            ref=options["ref"],
            commit=options["sha"],
            branch=options["branch"],
            number=options["number"],
        )
        clone_config = CloneConfig(
            depth=int(_default(options["depth"], "clone", "depth")),
            tags=options["tags"],
            skip_verify=options["skip_verify"],
            recursive=options["recursive"],
            submodule_remote=options["submodule_update_remote"],
            submodule_overrides=parse_submodule_overrides(
                options["submodule_override"]
            ),
            attempts=int(_default(options["attempts"], "retry", "attempts")),
            backoff=parse_backoff(_default(options["backoff"], "retry", "backoff")),
            backoff_attempts=int(
                _default(options["backoff_attempts"], "retry", "backoff_attempts")
            ),
        )
        credentials = NetrcCredentials(
            machine=options["netrc_machine"],
            login=options["netrc_username"],
            password=options["netrc_password"],
            ssh_key=options["ssh_key"],
        )
    except (ValidationError, ValueError) as e:
        raise click.UsageError(str(e))

    return context, clone_config, credentials


def _check_context(context) -> None:
    try:
        check_preconditions(context)
    except ValueError as e:
        raise click.UsageError(str(e))


def _with_settings(f):
    @wraps(f)
    def wrapper(**options):
        context, clone_config, credentials = load_settings(ConfigAccessor(), **options)
        return f(context, clone_config, credentials)

    return wrapper


@click.command(name="clone")
@clone_options
@_with_settings
def clone(context, clone_config, credentials):
    """Clone a commit, pull request or tag into the build workspace."""
    _check_context(context)

    if context.number is not None:
        logger.debug(f"Build #{context.number}")
    logger.debug(f"Preparing {context.path} from {context.remote} at {context.ref}")

    try:
        info = clone_workspace(context, clone_config, credentials)
    except CloneError as e:
        log_error_and_quit(logger, pretty_print_clone_error(e))
        return

    logger.debug(f"HEAD is {info['head']} on {info['branch']}")
    log_result_and_quit(logger, True, type="Clone")


@click.command(name="plan")
@clone_options
@_with_settings
def plan(context, clone_config, credentials):
    """Print the git commands a clone would run, without running them."""
    _check_context(context)
    runner = CloneRunner(context, clone_config, credentials)
    for operation in runner.plan():
        click.echo(f"{runner.executor.git} {operation}")


def log_error_and_quit(logger, error):
    logger.error(error)
    sys.exit(1)


def log_result_and_quit(logger, success: bool, type: str):
    if success:
        logger.info(f"{type} has finished successfully.")
        sys.exit(0)
    logger.error(f"{type} has failed.")
    sys.exit(1)
