"""ciclone CLI"""

import click

from ciclone import __version__
from ciclone.cli.clone import clone, plan

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="ciclone")
@click.pass_context
def cli(ctx):
    """
    Prepare a CI build workspace from a git remote.
    """
    ctx.ensure_object(dict)


cli.add_command(add_debug_option(clone))
cli.add_command(add_debug_option(plan))

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
