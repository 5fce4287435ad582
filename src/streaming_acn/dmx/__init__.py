"""DMX universe helpers."""

from streaming_acn.dmx.universe import (
    DMX_CHANNEL_COUNT,
    DMX_CHANNEL_MAX,
    DMX_CHANNEL_MIN,
    DMX_UNIVERSE_SIZE,
    SACN_PORT,
    Universe,
    create_universe_buffer,
    extract_channel_payload,
    is_valid_dmx_channel,
    is_valid_universe_number,
    multicast_group,
)

__all__ = [
    "Universe",
    "DMX_CHANNEL_COUNT",
    "DMX_CHANNEL_MIN",
    "DMX_CHANNEL_MAX",
    "DMX_UNIVERSE_SIZE",
    "SACN_PORT",
    "create_universe_buffer",
    "extract_channel_payload",
    "is_valid_dmx_channel",
    "is_valid_universe_number",
    "multicast_group",
]
