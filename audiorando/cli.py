"""CLI for audiorando."""

from __future__ import annotations

import logging
import platform

import click

from audiorando import __version__
from audiorando.config import DEFAULT_CONFIG, EngineConfig
from audiorando.derive import OutputKind, OutputRequest
from audiorando.errors import EntropyError
from audiorando.logging_config import setup_logging


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log tick and request details.")
@click.option("--log-file", default=None, help="Also write logs to this file.")
def main(verbose: bool, log_file: str | None) -> None:
    """🎙️ audiorando — random values from ambient noise."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING, log_file)


# ────────────────────────────────────────────────────────────
# Discovery & probing
# ────────────────────────────────────────────────────────────


@main.command()
def scan() -> None:
    """Discover available frame sources on this machine."""
    from audiorando.sources import detect_available_sources

    click.echo(f"Platform: {platform.system()} {platform.machine()} (Python {platform.python_version()})")
    click.echo()

    sources = detect_available_sources()
    click.echo(f"Found {len(sources)} available frame source(s):\n")
    for src in sources:
        click.echo(f"  ✅ {src.name:<15} {src.description}")
    if not sources:
        click.echo("  (none found — replay a capture with --input FILE)")


@main.command()
@click.option("--input", "input_path", default=None, help="Read frames from FILE ('-' for stdin).")
@click.option("--frames", default=10, type=int, help="Number of frames to read.")
@click.option("--frame-size", default=DEFAULT_CONFIG.frame_size, type=int, help="Bytes per frame.")
@click.option("--threshold", default=DEFAULT_CONFIG.quality_threshold, type=float,
              help="Quality score a frame must exceed.")
def probe(input_path: str | None, frames: int, frame_size: int, threshold: float) -> None:
    """Score frames and show what the whitener keeps."""
    from audiorando.conditioning import whiten
    from audiorando.stats import quality_score, shannon_entropy

    source = _open_source(input_path, frame_size)
    click.echo(f"Probing: {source.name} ({frame_size} bytes/frame, threshold {threshold})\n")
    click.echo(f"{'Frame':>5} {'Quality':>8} {'Kept':>5} {'Shannon':>8}  Status")
    click.echo("-" * 44)

    admitted = 0
    with source:
        for i in range(frames):
            try:
                frame = source.read_frame()
            except EOFError:
                break
            score = quality_score(frame)
            kept = whiten(frame)
            ok = score > threshold
            admitted += ok
            click.echo(
                f"{i:>5} {score:>8.2f} {len(kept):>5} {shannon_entropy(kept):>8.3f}  "
                f"{'admit' if ok else 'reject'}"
            )
    click.echo(f"\nAdmitted {admitted}/{frames} frames")


# ────────────────────────────────────────────────────────────
# Generate
# ────────────────────────────────────────────────────────────


@main.command()
@click.argument("kind", type=click.Choice([k.value for k in OutputKind]))
@click.option("--length", default=16, type=int,
              help="Password characters, or output bytes for hex and number.")
@click.option("--digits", default=None, type=int,
              help="Fixed number width (default from config).")
@click.option("--full", is_flag=True, help="Print the whole number instead of a fixed width.")
@click.option("--count", default=1, type=int, help="Number of dice.")
@click.option("--min", "low", default=1, type=int, help="Lowest die face.")
@click.option("--max", "high", default=6, type=int, help="Highest die face.")
@click.option("--input", "input_path", default=None,
              help="Replay frames from FILE ('-' for stdin) instead of the microphone.")
@click.option("--threshold", default=DEFAULT_CONFIG.quality_threshold, type=float,
              help="Quality score a frame must exceed.")
@click.option("--frame-size", default=DEFAULT_CONFIG.frame_size, type=int, help="Bytes per frame.")
@click.option("--capacity", default=DEFAULT_CONFIG.pool_capacity, type=int, help="Pool capacity in bytes.")
@click.option("--max-ticks", default=1000, type=int, help="Give up after this many frames.")
def generate(
    kind: str,
    length: int,
    digits: int | None,
    full: bool,
    count: int,
    low: int,
    high: int,
    input_path: str | None,
    threshold: float,
    frame_size: int,
    capacity: int,
    max_ticks: int,
) -> None:
    """Harvest entropy and print one password, hex string, number or dice roll.

    Examples:

        audiorando generate password --length 20

        audiorando generate number --digits 6

        audiorando generate dice --count 3 --min 1 --max 20
    """
    from audiorando.engine import AudioEntropyEngine
    from audiorando.harvest import harvest_until

    config = _make_config(frame_size=frame_size, pool_capacity=capacity, quality_threshold=threshold)
    request = _make_request(OutputKind(kind), length, digits, full, count, low, high, config)
    try:
        request.validate()
    except EntropyError as exc:
        raise click.ClickException(str(exc)) from exc

    engine = AudioEntropyEngine(config)
    needed = engine.bytes_needed(request)
    if needed > config.pool_capacity:
        raise click.ClickException(
            f"request needs {needed} entropy bytes but the pool holds at most {config.pool_capacity}"
        )
    with _open_source(input_path, frame_size) as source:
        harvest_until(engine, source, needed, max_ticks)

    try:
        result = engine.generate(request)
    except EntropyError as exc:
        raise click.ClickException(str(exc)) from exc

    if result.kind is OutputKind.DICE_ROLL:
        click.echo(f"Rolls: {', '.join(str(r) for r in result.rolls)}")
        click.echo(f"Total: {result.value}")
    else:
        click.echo(result.value)


# ────────────────────────────────────────────────────────────
# Monitor
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--input", "input_path", default=None, help="Replay frames from FILE instead of the microphone.")
@click.option("--interval", default=0.05, type=float, help="Seconds between ticks.")
@click.option("--refresh", default=0.5, type=float, help="Screen refresh in seconds.")
@click.option("--threshold", default=DEFAULT_CONFIG.quality_threshold, type=float,
              help="Quality score a frame must exceed.")
@click.option("--frame-size", default=DEFAULT_CONFIG.frame_size, type=int, help="Bytes per frame.")
def monitor(input_path: str | None, interval: float, refresh: float, threshold: float, frame_size: int) -> None:
    """Live pool and signal-quality dashboard. Press Ctrl+C to stop."""
    from audiorando.engine import AudioEntropyEngine
    from audiorando.monitor import EntropyMonitor

    config = _make_config(frame_size=frame_size, quality_threshold=threshold)
    engine = AudioEntropyEngine(config)
    with _open_source(input_path, frame_size) as source:
        EntropyMonitor(engine, source, refresh_rate=refresh, interval=interval).run()


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _make_config(**overrides) -> EngineConfig:
    try:
        return EngineConfig(**overrides)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _make_request(
    kind: OutputKind,
    length: int,
    digits: int | None,
    full: bool,
    count: int,
    low: int,
    high: int,
    config: EngineConfig,
) -> OutputRequest:
    if kind is OutputKind.PASSWORD:
        return OutputRequest.password(length)
    if kind is OutputKind.HEX_STRING:
        return OutputRequest.hex_string(length)
    if kind is OutputKind.NUMBER:
        if full:
            return OutputRequest.number(length)
        return OutputRequest.number(length, config.number_digits if digits is None else digits)
    return OutputRequest.dice(count, low, high)


def _open_source(input_path: str | None, frame_size: int):
    """File source when a path is given, otherwise the microphone."""
    from audiorando.sources import FileSource, MicrophoneSource

    if input_path is not None:
        source = FileSource(input_path, frame_size=frame_size)
        if not source.is_available():
            raise click.ClickException(f"{input_path}: no such file")
        return source

    source = MicrophoneSource(frame_size=frame_size)
    if not source.is_available():
        raise click.ClickException("No microphone available. Replay a capture with --input FILE.")
    return source
