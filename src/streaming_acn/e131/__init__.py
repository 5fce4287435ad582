"""E1.31 layer codecs and packet assembly."""

from streaming_acn.e131.framing_layer import (
    FORCE_SYNCHRONIZATION,
    PREVIEW_DATA,
    STREAM_TERMINATED,
    option_flags,
)
from streaming_acn.e131.packets import (
    DATA_PACKET_SIZE,
    SYNC_PACKET_SIZE,
    PacketAssembler,
    build_data_packet,
    build_discovery_packet,
    build_discovery_packets,
    build_sync_packet,
)

__all__ = [
    "PacketAssembler",
    "build_data_packet",
    "build_sync_packet",
    "build_discovery_packet",
    "build_discovery_packets",
    "option_flags",
    "PREVIEW_DATA",
    "STREAM_TERMINATED",
    "FORCE_SYNCHRONIZATION",
    "DATA_PACKET_SIZE",
    "SYNC_PACKET_SIZE",
]
