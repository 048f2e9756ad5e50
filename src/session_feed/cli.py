"""CLI entry points: session-feed parse, session-feed follow, session-feed sessions."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import click

from .config import Config
from .transcripts import ParsedMessage, ParseResult


def _format_message(message: ParsedMessage) -> str:
    return f"[{message.timestamp}] {message.type.value}: {message.content}"


def _echo_result(result: ParseResult, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict()))
        return
    for message in result.messages:
        click.echo(_format_message(message))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Session Feed: readable message feed from Claude Code transcripts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()


@cli.command()
@click.argument("transcript", type=click.Path(path_type=Path))
@click.option("--from-byte", type=click.IntRange(min=0), default=0, help="Resume offset from a previous parse")
@click.option("--json", "as_json", is_flag=True, help="Output the parse result as JSON")
def parse(transcript: Path, from_byte: int, as_json: bool) -> None:
    """Parse a transcript once and print its messages."""
    from .transcripts.claude import parse_transcript

    result = parse_transcript(transcript, from_byte)
    _echo_result(result, as_json)
    if not as_json:
        if not result.messages:
            click.echo("No new messages.")
        click.echo(f"Next offset: {result.bytes_read}")


@cli.command()
@click.argument("transcript", type=click.Path(path_type=Path))
@click.option("--interval", type=float, default=None, help="Seconds between polls (default from config)")
@click.option("--once", is_flag=True, help="Poll a single time and exit")
@click.option("--reset", is_flag=True, help="Forget the saved offset and start from the beginning")
@click.option("--json", "as_json", is_flag=True, help="Output each poll's result as JSON")
@click.pass_context
def follow(ctx: click.Context, transcript: Path, interval: float | None, once: bool, reset: bool, as_json: bool) -> None:
    """Poll a transcript, printing only messages appended since the last poll.

    The offset is saved after every poll, so an interrupted follow resumes
    where it left off.
    """
    from .transcripts.claude import parse_transcript

    config = ctx.obj["config"]
    transcript = transcript.expanduser().resolve()
    if interval is None:
        interval = config.poll_interval

    if reset:
        config.set_offset(transcript, 0)

    try:
        while True:
            offset = config.get_offset(transcript)
            result = parse_transcript(transcript, offset)
            if result.messages or as_json:
                _echo_result(result, as_json)
            if result.bytes_read != offset:
                config.set_offset(transcript, result.bytes_read)
            if once:
                break
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("Stopped.")


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="List every transcript, oldest first")
@click.option("--max-age-hours", type=int, default=None, help="Recency window (default from config)")
@click.pass_context
def sessions(ctx: click.Context, show_all: bool, max_age_hours: int | None) -> None:
    """List Claude Code transcripts available to follow."""
    from .transcripts.claude import find_all_transcripts, find_recent_transcripts

    config = ctx.obj["config"]

    if show_all:
        transcripts = find_all_transcripts(config.claude_projects_dir)
    else:
        hours = max_age_hours if max_age_hours is not None else config.max_age_hours
        transcripts = find_recent_transcripts(config.claude_projects_dir, hours)

    if not transcripts:
        click.echo("No transcripts found.")
        return

    for path in transcripts:
        size = path.stat().st_size
        offset = config.get_offset(path.resolve())
        click.echo(f"  {path.parent.name}/{path.name} ({size:,} bytes, offset {offset:,})")


if __name__ == "__main__":
    cli()
