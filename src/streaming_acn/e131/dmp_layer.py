"""DMP Layer: a "set property" message carrying one DMX universe."""

from __future__ import annotations

import struct

from streaming_acn.core.exceptions import SlotCountError
from streaming_acn.dmx.universe import DMX_CHANNEL_COUNT, DMX_START_CODE
from streaming_acn.e131.pdu import wrap_pdu

VECTOR_DMP_SET_PROPERTY = 0x02
ADDRESS_TYPE_DATA_TYPE = 0xA1
FIRST_PROPERTY_ADDRESS = 0x0000
ADDRESS_INCREMENT = 0x0001
PROPERTY_VALUE_COUNT = DMX_CHANNEL_COUNT + 1  # start code + 512 slots

DMP_LAYER_SIZE = 10 + PROPERTY_VALUE_COUNT  # 523


def build_dmp_layer(slots: bytes, start_code: int = DMX_START_CODE) -> bytes:
    """
    Build the DMP PDU for a full universe.

    The property values are the start code followed by all 512 slots;
    partial universes are not encoded.
    """
    if len(slots) != DMX_CHANNEL_COUNT:
        raise SlotCountError(len(slots))
    body = (
        struct.pack(
            ">BBHHH",
            VECTOR_DMP_SET_PROPERTY,
            ADDRESS_TYPE_DATA_TYPE,
            FIRST_PROPERTY_ADDRESS,
            ADDRESS_INCREMENT,
            PROPERTY_VALUE_COUNT,
        )
        + bytes([start_code])
        + bytes(slots)
    )
    return wrap_pdu(body, "DMP")
