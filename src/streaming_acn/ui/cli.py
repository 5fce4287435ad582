"""
Command-Line Interface for Streaming ACN.

Encodes data, synchronization and universe discovery packets and prints
them as hex, for inspecting the wire format or feeding a packet replay
tool.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import structlog

from streaming_acn import __version__
from streaming_acn.core.config import Settings
from streaming_acn.core.exceptions import E131Error
from streaming_acn.core.identity import SourceIdentity
from streaming_acn.dmx.universe import DMX_CHANNEL_COUNT, Universe
from streaming_acn.e131.framing_layer import option_flags
from streaming_acn.e131.packets import PacketAssembler

logger = structlog.get_logger()


def _parse_channel(spec: str) -> Tuple[int, int]:
    try:
        channel, value = spec.split("=", 1)
        return int(channel), int(value)
    except ValueError:
        raise click.BadParameter(f"expected CHANNEL=VALUE, got {spec!r}")


def _emit(packets: list[bytes], output: Optional[str]) -> None:
    if output:
        Path(output).write_bytes(b"".join(packets))
        click.echo(f"Wrote {len(packets)} packet(s) to {output}", err=True)
    else:
        for packet in packets:
            click.echo(packet.hex())


def _assembler(ctx: click.Context) -> PacketAssembler:
    return ctx.obj["assembler"]


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option("--source-name", help="Source name (1-63 bytes)")
@click.option("--priority", type=int, help="Source priority (0-200)")
@click.option("--cid", help="Component identifier (UUID)")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    config: Optional[str],
    source_name: Optional[str],
    priority: Optional[int],
    cid: Optional[str],
) -> None:
    """
    Streaming ACN - E1.31 (sACN) packet encoder

    Builds byte-exact E1.31 packets for a configured source identity.
    """
    ctx.ensure_object(dict)

    try:
        settings = Settings.from_yaml(Path(config)) if config else Settings()
    except E131Error as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # Configure logging
    log_level = "DEBUG" if debug or settings.debug else settings.log_level.upper()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    source = settings.source.model_copy(
        update={
            key: value
            for key, value in (
                ("source_name", source_name),
                ("priority", priority),
                ("cid", cid),
            )
            if value is not None
        }
    )
    try:
        identity = SourceIdentity.from_config(source)
    except E131Error as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["debug"] = debug
    ctx.obj["assembler"] = PacketAssembler(identity)


@cli.command()
@click.option("--universe", "-u", type=int, required=True, help="Universe (1-63999)")
@click.option("--sequence", "-s", type=int, default=0, help="Sequence number")
@click.option("--sync-address", type=int, default=0, help="Sync universe (0 = none)")
@click.option("--preview", is_flag=True, help="Mark as preview data")
@click.option("--terminate", is_flag=True, help="Mark the stream terminated")
@click.option("--force-sync", is_flag=True, help="Set force synchronization")
@click.option("--fill", type=int, default=0, help="Value for every channel (0-255)")
@click.option(
    "--channel",
    "-c",
    "channels",
    multiple=True,
    help="Channel override as CHANNEL=VALUE (1-512)",
)
@click.option("--output", "-o", type=click.Path(), help="Write raw bytes here")
@click.pass_context
def data(
    ctx: click.Context,
    universe: int,
    sequence: int,
    sync_address: int,
    preview: bool,
    terminate: bool,
    force_sync: bool,
    fill: int,
    channels: Tuple[str, ...],
    output: Optional[str],
) -> None:
    """Encode a data packet for one universe."""
    if not 0 <= fill <= 255:
        click.echo("Error: Fill value must be 0-255", err=True)
        sys.exit(1)

    overrides = dict(_parse_channel(spec) for spec in channels)

    try:
        dmx = Universe(number=universe, slots=bytes([fill]) * DMX_CHANNEL_COUNT)
        dmx = dmx.with_channels(overrides)
        packet = _assembler(ctx).data_packet(
            sync_address,
            sequence,
            option_flags(preview=preview, terminated=terminate, force_sync=force_sync),
            dmx,
        )
    except (E131Error, IndexError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit([packet], output)


@cli.command()
@click.option("--sync-address", type=int, required=True, help="Sync universe")
@click.option("--sequence", "-s", type=int, default=0, help="Sequence number")
@click.option("--output", "-o", type=click.Path(), help="Write raw bytes here")
@click.pass_context
def sync(
    ctx: click.Context,
    sync_address: int,
    sequence: int,
    output: Optional[str],
) -> None:
    """Encode a synchronization packet."""
    try:
        packet = _assembler(ctx).sync_packet(sync_address, sequence)
    except E131Error as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit([packet], output)


@cli.command()
@click.argument("universes", type=int, nargs=-1)
@click.option("--sequence", "-s", type=int, default=0, help="Sequence number")
@click.option("--output", "-o", type=click.Path(), help="Write raw bytes here")
@click.pass_context
def discovery(
    ctx: click.Context,
    universes: Tuple[int, ...],
    sequence: int,
    output: Optional[str],
) -> None:
    """Encode universe discovery packets, one per page."""
    try:
        packets = _assembler(ctx).discovery_packets(sequence, universes)
    except E131Error as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _emit(packets, output)


@cli.command()
@click.pass_context
def identity(ctx: click.Context) -> None:
    """Show the source identity packets are built with."""
    source = _assembler(ctx).identity
    click.echo(f"CID:         {source.cid_uuid}")
    click.echo(f"Source name: {source.source_name}")
    click.echo(f"Priority:    {source.priority}")


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
