"""
E1.31 Framing Layer.

Three variants share the layer: data packets (carrying a DMP PDU),
synchronization packets (no payload) and universe discovery packets
(carrying a Universe Discovery PDU). Each builder takes the nested PDU,
already wrapped, and returns the framing PDU around it.
"""

from __future__ import annotations

import struct

from streaming_acn.core.exceptions import OptionFlagsError
from streaming_acn.e131.pdu import wrap_pdu

VECTOR_E131_DATA_PACKET = 0x00000002
VECTOR_E131_EXTENDED_SYNCHRONIZATION = 0x00000001
VECTOR_E131_EXTENDED_DISCOVERY = 0x00000002

# Options byte
PREVIEW_DATA = 0x80
STREAM_TERMINATED = 0x40
FORCE_SYNCHRONIZATION = 0x20
OPTION_FLAGS_MASK = PREVIEW_DATA | STREAM_TERMINATED | FORCE_SYNCHRONIZATION


def option_flags(
    preview: bool = False,
    terminated: bool = False,
    force_sync: bool = False,
) -> int:
    """Compose the data packet options byte."""
    flags = 0
    if preview:
        flags |= PREVIEW_DATA
    if terminated:
        flags |= STREAM_TERMINATED
    if force_sync:
        flags |= FORCE_SYNCHRONIZATION
    return flags


def validate_option_flags(flags: int) -> int:
    if not isinstance(flags, int) or not 0 <= flags <= 0xFF:
        raise OptionFlagsError(flags, "must be a single byte")
    if flags & ~OPTION_FLAGS_MASK:
        raise OptionFlagsError(flags, "reserved bits 0-4 must be zero")
    return flags


def build_data_framing_layer(
    source_name_field: bytes,
    priority: int,
    sync_address: int,
    sequence: int,
    options: int,
    universe: int,
    dmp: bytes,
) -> bytes:
    body = (
        struct.pack(">I", VECTOR_E131_DATA_PACKET)
        + source_name_field
        + struct.pack(">BHBBH", priority, sync_address, sequence, options, universe)
        + dmp
    )
    return wrap_pdu(body, "framing")


def build_sync_framing_layer(sequence: int, sync_address: int) -> bytes:
    # Vector, sequence number, sync address, two reserved bytes.
    body = struct.pack(
        ">IBHH", VECTOR_E131_EXTENDED_SYNCHRONIZATION, sequence, sync_address, 0
    )
    return wrap_pdu(body, "framing")


def build_discovery_framing_layer(source_name_field: bytes, discovery: bytes) -> bytes:
    body = (
        struct.pack(">I", VECTOR_E131_EXTENDED_DISCOVERY)
        + source_name_field
        + bytes(4)  # reserved
        + discovery
    )
    return wrap_pdu(body, "framing")
