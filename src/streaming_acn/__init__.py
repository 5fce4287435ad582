"""
Streaming ACN: an ANSI E1.31 (sACN) packet encoder.

Serializes DMX-512 universes, synchronization triggers and universe
discovery lists into byte-exact E1.31 packets ready for any UDP
transport.
"""

__version__ = "0.1.0"
__author__ = "Streaming ACN Team"

from streaming_acn.core.config import Settings
from streaming_acn.core.identity import SourceIdentity
from streaming_acn.dmx.universe import Universe
from streaming_acn.e131.packets import (
    PacketAssembler,
    build_data_packet,
    build_discovery_packet,
    build_discovery_packets,
    build_sync_packet,
)

__all__ = [
    "Settings",
    "SourceIdentity",
    "Universe",
    "PacketAssembler",
    "build_data_packet",
    "build_sync_packet",
    "build_discovery_packet",
    "build_discovery_packets",
    "__version__",
]
