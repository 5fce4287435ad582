"""ACN Root Layer: preamble, packet identifier, vector and CID."""

from __future__ import annotations

import struct

from streaming_acn.core.exceptions import ComponentIdError
from streaming_acn.e131.pdu import FLAGS_AND_LENGTH_SIZE, flags_and_length

PREAMBLE_SIZE = 0x0010
POSTAMBLE_SIZE = 0x0000
ACN_PACKET_IDENTIFIER = b"ASC-E1.17\x00\x00\x00"

VECTOR_ROOT_E131_DATA = 0x00000004
VECTOR_ROOT_E131_EXTENDED = 0x00000008

# Preamble + postamble + packet identifier, ahead of the Flags-and-Length.
ROOT_PREAMBLE = (
    struct.pack(">HH", PREAMBLE_SIZE, POSTAMBLE_SIZE) + ACN_PACKET_IDENTIFIER
)
ROOT_LAYER_HEADER_SIZE = len(ROOT_PREAMBLE) + FLAGS_AND_LENGTH_SIZE + 4 + 16  # 38


def _root_fields(vector: int, cid: bytes) -> bytes:
    if len(cid) != 16:
        raise ComponentIdError(cid, f"must be 16 bytes, got {len(cid)}")
    return struct.pack(">I", vector) + cid


def root_layer_header(vector: int, cid: bytes, length: int) -> bytes:
    """
    Return the 38-byte root layer header for a given PDU length.

    ``length`` counts from the Flags-and-Length field to the end of the
    packet.
    """
    return ROOT_PREAMBLE + flags_and_length(length, "root") + _root_fields(vector, cid)


def build_root_layer(vector: int, cid: bytes, framing: bytes) -> bytes:
    """Wrap an already built framing layer PDU in the root layer."""
    length = ROOT_LAYER_HEADER_SIZE - len(ROOT_PREAMBLE) + len(framing)
    return root_layer_header(vector, cid, length) + framing
