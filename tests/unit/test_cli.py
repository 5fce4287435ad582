from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from streaming_acn.core.identity import SourceIdentity
from streaming_acn.dmx.universe import Universe
from streaming_acn.e131.packets import (
    build_data_packet,
    build_discovery_packet,
    build_sync_packet,
)
from streaming_acn.ui.cli import cli

CID = "00112233-4455-6677-8899-aabbccddeeff"
IDENTITY_ARGS = ["--cid", CID, "--source-name", "CLI", "--priority", "90"]


def _identity() -> SourceIdentity:
    return SourceIdentity(cid=CID, source_name="CLI", priority=90)


def test_data_command_prints_packet_hex() -> None:
    result = CliRunner().invoke(
        cli,
        IDENTITY_ARGS + ["data", "-u", "3", "-s", "5", "--fill", "1", "-c", "2=200"],
    )

    assert result.exit_code == 0, result.output
    expected = build_data_packet(
        _identity(),
        0,
        5,
        0,
        Universe(number=3, slots=b"\x01" * 512).with_channels({2: 200}),
    )
    assert expected.hex() in result.output.splitlines()


def test_sync_command_prints_packet_hex() -> None:
    result = CliRunner().invoke(
        cli, IDENTITY_ARGS + ["sync", "--sync-address", "7", "-s", "42"]
    )

    assert result.exit_code == 0, result.output
    assert build_sync_packet(_identity(), 7, 42).hex() in result.output.splitlines()


def test_discovery_command_prints_one_line_per_page() -> None:
    result = CliRunner().invoke(cli, IDENTITY_ARGS + ["discovery", "5", "1", "3"])

    assert result.exit_code == 0, result.output
    expected = build_discovery_packet(_identity(), 0, [1, 3, 5])
    assert expected.hex() in result.output.splitlines()


def test_data_command_writes_raw_bytes(tmp_path: Path) -> None:
    output = tmp_path / "packet.bin"
    result = CliRunner().invoke(
        cli, IDENTITY_ARGS + ["data", "-u", "1", "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == build_data_packet(
        _identity(), 0, 0, 0, Universe(number=1)
    )


def test_data_command_rejects_reserved_universe() -> None:
    result = CliRunner().invoke(cli, IDENTITY_ARGS + ["data", "-u", "0"])
    assert result.exit_code == 1
    assert "universe number" in result.output


def test_overlong_source_name_fails_at_startup() -> None:
    result = CliRunner().invoke(cli, ["--source-name", "x" * 64, "identity"])
    assert result.exit_code == 1
    assert "source name" in result.output


def test_identity_command_uses_config_file(tmp_path: Path) -> None:
    config = tmp_path / "settings.yaml"
    config.write_text(f"source:\n  cid: {CID}\n  source_name: From file\n")

    result = CliRunner().invoke(cli, ["--config", str(config), "identity"])

    assert result.exit_code == 0, result.output
    assert CID in result.output
    assert "From file" in result.output
