"""Click-based CLI for linkspan.

Developer tooling for checking how text is turned into clickable spans:
  - ``inspect``: lay out a message from Bot API entities and show each link
  - ``url``: show how a single URL is classified, displayed and opened

Log level precedence: CLI flag > LINKSPAN_LOG_LEVEL env var > .env > INFO.
"""

import json

import click
from telegram import MessageEntity

from .text_entities import ExpandLinksMode

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_MODES = tuple(mode.value for mode in ExpandLinksMode)


def _parse_entities(
    _ctx: click.Context, _param: click.Parameter, value: str
) -> list[MessageEntity]:
    try:
        raw = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise click.BadParameter("must be a JSON array of entities")
    entities: list[MessageEntity] = []
    for item in raw:
        if not isinstance(item, dict):
            raise click.BadParameter("every entity must be a JSON object")
        try:
            entity = MessageEntity.de_json(item, None)
        except (TypeError, KeyError, ValueError) as e:
            raise click.BadParameter(f"bad entity {item!r}: {e}") from e
        if entity is not None:
            entities.append(entity)
    return entities


@click.group(
    help="Inspect clickable link spans (urls, mentions, hashtags, commands).",
)
@click.version_option(package_name="linkspan", prog_name="linkspan")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level.",
)
def cli(verbose: bool, log_level: str | None) -> None:
    from .config import config
    from .main import setup_logging

    if verbose:
        level = "DEBUG"
    elif log_level is not None:
        level = log_level.upper()
    else:
        level = config.log_level
        if level not in _LOG_LEVELS:
            raise click.UsageError(
                f"LINKSPAN_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, "
                f"got {level!r}"
            )
    setup_logging(level)


# --- inspect command -------------------------------------------------------


@cli.command("inspect")
@click.argument("text")
@click.option(
    "--entities",
    default="[]",
    callback=_parse_entities,
    help="Bot API message entities as a JSON array.",
)
@click.option(
    "--mode",
    type=click.Choice(_MODES, case_sensitive=False),
    default=ExpandLinksMode.SHORTENED.value,
    help="How links are expanded in the original text.",
)
def inspect_cmd(text: str, entities: list[MessageEntity], mode: str) -> None:
    """Show every link found in TEXT and the expanded original text."""
    from .layout import TextLayout

    layout = TextLayout.from_message(text, entities)
    try:
        for link in layout.links():
            handler = link.handler
            click.echo(
                f"{handler.kind.value:<13} {text[link.start : link.end]!r}"
                f"  tooltip={handler.tooltip()!r}  drag={handler.drag_text()!r}"
            )
        click.echo(layout.original_text(ExpandLinksMode(mode.lower())))
    finally:
        layout.release()


# --- url command -----------------------------------------------------------


@cli.command("url")
@click.argument("value")
def url_cmd(value: str) -> None:
    """Show how VALUE is classified, displayed and opened."""
    from .handlers import UrlClickHandler

    handler = UrlClickHandler(value)
    click.echo(f"email:    {'yes' if handler.is_email() else 'no'}")
    click.echo(f"readable: {handler.readable()}")
    click.echo(f"url:      {handler.url()}")
