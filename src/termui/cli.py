"""CLI entry point for termui. Uses Click for argument parsing."""

from __future__ import annotations

import asyncio
import logging

import click

from termui.config import LOG_LEVELS, Config, ConfigError
from termui.theme import theme_names

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _load_config(**overrides) -> Config:
    """Environment defaults, then any option the user actually passed."""
    try:
        config = Config.from_env()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None
    for name, value in overrides.items():
        if value is not None:
            setattr(config, name, value)
    return config


def _validate(config: Config, registry) -> Config:
    try:
        return config.validate(registry)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None


@click.group(invoke_without_command=True)
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default=None, help="Logging verbosity")
@click.pass_context
def main(ctx, log_level):
    """Full-screen terminal UI showcase, locally or over WebSocket."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Local terminal
# ---------------------------------------------------------------------------


@main.command()
@click.option("--screen", "start_screen", default=None, help="Screen to open first")
@click.option("--theme", type=click.Choice(theme_names()), default=None, help="Initial colour theme")
@click.option("--log-file", default=None, help="Write logs here (the screen itself is the output)")
@click.pass_context
def local(ctx, start_screen, theme, log_file):
    """Run the showcase in this terminal."""
    config = _load_config(start_screen=start_screen, theme=theme, log_file=log_file, log_level=ctx.obj["log_level"])

    from termui.screens import build_registry

    registry = build_registry()
    _validate(config, registry)

    # log lines on stdout would tear the frame, so without a file stay quiet
    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=getattr(logging, config.log_level.upper()),
            format=LOG_FORMAT,
        )
    else:
        logging.basicConfig(level=logging.CRITICAL, format=LOG_FORMAT)

    from termui.transports.local import run_local

    reason = asyncio.run(run_local(config, registry))
    logging.getLogger(__name__).info("local session ended: %s", reason)


# ---------------------------------------------------------------------------
# WebSocket server
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to bind to (default: 2222)")
@click.option("--screen", "start_screen", default=None, help="Screen every new session opens on")
@click.option("--theme", type=click.Choice(theme_names()), default=None, help="Initial colour theme")
@click.pass_context
def serve(ctx, host, port, start_screen, theme):
    """Serve the showcase to browsers over WebSocket."""
    config = _load_config(
        host=host, port=port, start_screen=start_screen, theme=theme, log_level=ctx.obj["log_level"]
    )

    from termui.screens import build_registry

    registry = build_registry()
    _validate(config, registry)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format=LOG_FORMAT,
    )

    from termui.transports.websocket import create_app

    app = create_app(config, registry)

    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


@main.command()
def screens():
    """List the registered screens."""
    from termui.screens import build_registry

    for key, screen in build_registry().items():
        title = getattr(screen, "title", "")
        click.echo(f"{key:<12} {title}")


if __name__ == "__main__":
    main()
