"""Canonical DMX universe sizing, numbering and slot helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from streaming_acn.core.exceptions import (
    SlotCountError,
    SlotValueError,
    UniverseNumberError,
)

DMX_START_CODE = 0x00
DMX_START_CODE_INDEX = 0
DMX_CHANNEL_COUNT = 512
DMX_CHANNEL_MIN = 1
DMX_CHANNEL_MAX = DMX_CHANNEL_COUNT
DMX_UNIVERSE_SIZE = DMX_CHANNEL_COUNT + 1

UNIVERSE_MIN = 1
UNIVERSE_MAX = 63999

SACN_PORT = 5568

SlotData = Union[bytes, bytearray, memoryview, Iterable[int]]


def create_universe_buffer() -> bytearray:
    """Create a DMX universe buffer including start code + 512 channels."""
    universe = bytearray(DMX_UNIVERSE_SIZE)
    universe[DMX_START_CODE_INDEX] = DMX_START_CODE
    return universe


def is_valid_dmx_channel(channel: int) -> bool:
    """Return True when a channel index is a valid 1-based DMX slot."""
    return DMX_CHANNEL_MIN <= channel <= DMX_CHANNEL_MAX


def extract_channel_payload(universe: bytes) -> bytes:
    """Return the 512-channel payload from a full universe buffer."""
    return universe[DMX_CHANNEL_MIN:DMX_UNIVERSE_SIZE]


def is_valid_universe_number(number: int) -> bool:
    """Return True for universe numbers usable on the wire (1-63999)."""
    return (
        isinstance(number, int)
        and not isinstance(number, bool)
        and UNIVERSE_MIN <= number <= UNIVERSE_MAX
    )


def validate_universe_number(number: int) -> int:
    if not is_valid_universe_number(number):
        raise UniverseNumberError(number)
    return number


def multicast_group(number: int) -> str:
    """
    Return the IPv4 multicast group a receiver joins for a universe.

    The group is 239.255.<hi>.<lo> where hi/lo are the two bytes of the
    universe number.
    """
    validate_universe_number(number)
    return f"239.255.{number >> 8}.{number & 0xFF}"


def _snapshot_slots(slots: SlotData) -> bytes:
    if isinstance(slots, int):
        raise SlotValueError(slots, "slots must be a sequence, not a count")
    try:
        return bytes(slots)
    except (TypeError, ValueError) as e:
        raise SlotValueError(slots, "slots must be integers from 0 to 255") from e


@dataclass(frozen=True)
class Universe:
    """
    One DMX-512 universe: a universe number and its 512 channel slots.

    Slot 0 holds channel 1. The start code is not stored; it is
    prefixed when the universe is encoded. Slots are copied into an
    immutable ``bytes`` snapshot, so later changes to the caller's
    buffer never reach an encode in flight.
    """

    number: int
    slots: bytes = field(default=bytes(DMX_CHANNEL_COUNT))

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", _snapshot_slots(self.slots))

    @classmethod
    def from_buffer(cls, number: int, buffer: bytes) -> "Universe":
        """Build a universe from a start-code-prefixed 513-byte buffer."""
        return cls(number=number, slots=extract_channel_payload(bytes(buffer)))

    def validate(self) -> None:
        """Raise a ValidationError unless the universe can be encoded."""
        validate_universe_number(self.number)
        if len(self.slots) != DMX_CHANNEL_COUNT:
            raise SlotCountError(len(self.slots))

    def channel(self, channel: int) -> int:
        """Return the value of a 1-based DMX channel."""
        if not is_valid_dmx_channel(channel):
            raise IndexError(f"DMX channel {channel} out of range")
        return self.slots[channel - 1]

    def with_channels(self, values: dict[int, int]) -> "Universe":
        """Return a copy with the given 1-based channels set."""
        slots = bytearray(self.slots)
        for channel, value in values.items():
            if not is_valid_dmx_channel(channel):
                raise IndexError(f"DMX channel {channel} out of range")
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or not 0 <= value <= 255
            ):
                raise SlotValueError(value, f"channel {channel} value must be 0-255")
            slots[channel - 1] = value
        return Universe(number=self.number, slots=bytes(slots))
