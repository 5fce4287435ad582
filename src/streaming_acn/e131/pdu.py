"""
Flags-and-Length packing shared by every ACN/E1.31 layer.

Each PDU starts with a 16-bit field: the top nibble holds the flags
(always 0x7) and the low 12 bits the PDU length counted from the first
byte of this field to the last byte of the PDU, nested PDUs included.
"""

from __future__ import annotations

import struct

from streaming_acn.core.exceptions import LayerLengthError

PDU_FLAGS = 0x7000
PDU_LENGTH_MASK = 0x0FFF
PDU_MAX_LENGTH = PDU_LENGTH_MASK
FLAGS_AND_LENGTH_SIZE = 2


def flags_and_length(length: int, layer: str = "PDU") -> bytes:
    """Pack a PDU length into its big-endian Flags-and-Length field."""
    if not 0 <= length <= PDU_MAX_LENGTH:
        raise LayerLengthError(layer, length)
    return struct.pack(">H", PDU_FLAGS | length)


def wrap_pdu(body: bytes, layer: str = "PDU") -> bytes:
    """
    Prefix a PDU body with its Flags-and-Length field.

    ``body`` is everything after the field: the layer's own header
    fields followed by any nested PDUs, already wrapped.
    """
    return flags_and_length(FLAGS_AND_LENGTH_SIZE + len(body), layer) + body
