"""
E1.31 packet assembly.

Each builder validates its inputs, takes one snapshot of the source
identity, then builds the layers innermost first so every
Flags-and-Length field is computed from the bytes actually nested below
it. Nothing is returned unless every layer encoded successfully.
"""

from __future__ import annotations

from typing import Iterable, List

import structlog

from streaming_acn.core.exceptions import (
    DiscoveryPageError,
    SequenceNumberError,
    SyncAddressError,
)
from streaming_acn.core.identity import SourceIdentity
from streaming_acn.dmx.universe import UNIVERSE_MAX, UNIVERSE_MIN, Universe
from streaming_acn.e131.discovery_layer import (
    UNIVERSES_PER_PAGE,
    build_discovery_layer,
    normalize_universes,
    paginate_universes,
    validate_page,
)
from streaming_acn.e131.dmp_layer import build_dmp_layer
from streaming_acn.e131.framing_layer import (
    build_data_framing_layer,
    build_discovery_framing_layer,
    build_sync_framing_layer,
    validate_option_flags,
)
from streaming_acn.e131.root_layer import (
    VECTOR_ROOT_E131_DATA,
    VECTOR_ROOT_E131_EXTENDED,
    build_root_layer,
)

logger = structlog.get_logger()

DATA_PACKET_SIZE = 638
SYNC_PACKET_SIZE = 49


def _sequence(sequence: int) -> int:
    if not isinstance(sequence, int) or isinstance(sequence, bool):
        raise SequenceNumberError(sequence)
    return sequence & 0xFF


def _sync_address(sync_address: int, allow_none: bool) -> int:
    if not isinstance(sync_address, int) or isinstance(sync_address, bool):
        raise SyncAddressError(sync_address, "must be an integer")
    if sync_address == 0 and allow_none:
        return sync_address
    if not UNIVERSE_MIN <= sync_address <= UNIVERSE_MAX:
        lowest = 0 if allow_none else UNIVERSE_MIN
        raise SyncAddressError(sync_address, f"must be from {lowest} to {UNIVERSE_MAX}")
    return sync_address


def build_data_packet(
    identity: SourceIdentity,
    sync_address: int,
    sequence: int,
    options: int,
    universe: Universe,
) -> bytes:
    """
    Build an E1.31 data packet carrying one full universe.

    ``sync_address`` 0 means the data is not synchronized. ``options``
    is the framing options byte (see ``option_flags``).
    """
    universe.validate()
    sync_address = _sync_address(sync_address, allow_none=True)
    sequence = _sequence(sequence)
    options = validate_option_flags(options)
    source = identity.snapshot()

    dmp = build_dmp_layer(universe.slots)
    framing = build_data_framing_layer(
        source.source_name_field,
        source.priority,
        sync_address,
        sequence,
        options,
        universe.number,
        dmp,
    )
    packet = build_root_layer(VECTOR_ROOT_E131_DATA, source.cid, framing)
    logger.debug(
        "Built data packet",
        universe=universe.number,
        sequence=sequence,
        length=len(packet),
    )
    return packet


def build_sync_packet(
    identity: SourceIdentity,
    sync_address: int,
    sequence: int,
) -> bytes:
    """Build an E1.31 synchronization packet for ``sync_address``."""
    sync_address = _sync_address(sync_address, allow_none=False)
    sequence = _sequence(sequence)
    source = identity.snapshot()

    framing = build_sync_framing_layer(sequence, sync_address)
    packet = build_root_layer(VECTOR_ROOT_E131_EXTENDED, source.cid, framing)
    logger.debug(
        "Built sync packet",
        sync_address=sync_address,
        sequence=sequence,
        length=len(packet),
    )
    return packet


def build_discovery_packet(
    identity: SourceIdentity,
    sequence: int,
    universes: Iterable[int],
    page: int = 0,
    last_page: int = 0,
) -> bytes:
    """
    Build one page of an E1.31 universe discovery packet.

    Universe numbers are deduplicated and sent in ascending order. The
    discovery framing layer has no sequence number field; ``sequence``
    is validated for symmetry with the other builders and not encoded.
    Lists longer than 512 must be split with ``build_discovery_packets``.
    """
    _sequence(sequence)
    ordered = normalize_universes(universes)
    if len(ordered) > UNIVERSES_PER_PAGE:
        raise DiscoveryPageError(
            len(ordered), f"a page holds at most {UNIVERSES_PER_PAGE} universes"
        )
    validate_page(page, last_page)
    source = identity.snapshot()

    discovery = build_discovery_layer(ordered, page, last_page)
    framing = build_discovery_framing_layer(source.source_name_field, discovery)
    packet = build_root_layer(VECTOR_ROOT_E131_EXTENDED, source.cid, framing)
    logger.debug(
        "Built discovery packet",
        universes=len(ordered),
        page=page,
        last_page=last_page,
        length=len(packet),
    )
    return packet


def build_discovery_packets(
    identity: SourceIdentity,
    sequence: int,
    universes: Iterable[int],
) -> List[bytes]:
    """Build every page needed to advertise ``universes``."""
    pages = paginate_universes(universes)
    last_page = len(pages) - 1
    return [
        build_discovery_packet(identity, sequence, page_universes, page, last_page)
        for page, page_universes in enumerate(pages)
    ]


class PacketAssembler:
    """Packet builders bound to one source identity."""

    def __init__(self, identity: SourceIdentity):
        self.identity = identity

    def data_packet(
        self,
        sync_address: int,
        sequence: int,
        options: int,
        universe: Universe,
    ) -> bytes:
        return build_data_packet(self.identity, sync_address, sequence, options, universe)

    def sync_packet(self, sync_address: int, sequence: int) -> bytes:
        return build_sync_packet(self.identity, sync_address, sequence)

    def discovery_packet(
        self,
        sequence: int,
        universes: Iterable[int],
        page: int = 0,
        last_page: int = 0,
    ) -> bytes:
        return build_discovery_packet(
            self.identity, sequence, universes, page, last_page
        )

    def discovery_packets(self, sequence: int, universes: Iterable[int]) -> List[bytes]:
        return build_discovery_packets(self.identity, sequence, universes)
