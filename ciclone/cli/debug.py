import click

from .utils.logging import configure_logging


def add_debug_option(cmd: click.Command) -> click.Command:
    """Add a ``--debug/--no-debug`` switch to the group or to a sub-command."""
    cmd.params.insert(
        0,
        click.Option(
            ["--debug/--no-debug"],
            is_eager=True,
            expose_value=False,
            callback=_set_debug,
            help="Also log workspace probing and other internal steps.",
        ),
    )
    return cmd


def _set_debug(ctx, param, value: bool) -> bool:
    # `ciclone --debug clone` must survive the sub-command's own default
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    debug = value or root_ctx.obj.get("DEBUG", False)
    root_ctx.obj["DEBUG"] = debug

    configure_logging(debug)
    return debug
