"""
Universe Discovery Layer.

Lists the universes a source is transmitting on. A page holds at most
512 universe numbers; larger lists are split over pages that share the
same Last Page value.
"""

from __future__ import annotations

import struct
from typing import Iterable, List

from streaming_acn.core.exceptions import DiscoveryPageError
from streaming_acn.dmx.universe import validate_universe_number
from streaming_acn.e131.pdu import wrap_pdu

VECTOR_UNIVERSE_DISCOVERY_UNIVERSE_LIST = 0x00000001

UNIVERSES_PER_PAGE = 512
MAX_PAGE = 0xFF


def normalize_universes(universes: Iterable[int]) -> List[int]:
    """Validate, deduplicate and sort universe numbers ascending."""
    return sorted({validate_universe_number(u) for u in universes})


def paginate_universes(universes: Iterable[int]) -> List[List[int]]:
    """Split universe numbers into sorted pages of at most 512 entries."""
    ordered = normalize_universes(universes)
    pages = [
        ordered[i:i + UNIVERSES_PER_PAGE]
        for i in range(0, len(ordered), UNIVERSES_PER_PAGE)
    ]
    if len(pages) > MAX_PAGE + 1:
        raise DiscoveryPageError(len(ordered), "too many universes for 256 pages")
    return pages or [[]]


def validate_page(page: int, last_page: int) -> None:
    if any(not isinstance(n, int) or isinstance(n, bool) for n in (page, last_page)):
        raise DiscoveryPageError((page, last_page), "page numbers must be integers")
    if not 0 <= last_page <= MAX_PAGE:
        raise DiscoveryPageError(last_page, "last page must be 0-255")
    if not 0 <= page <= last_page:
        raise DiscoveryPageError(page, f"page must be 0-{last_page}")


def build_discovery_layer(
    universes: Iterable[int],
    page: int = 0,
    last_page: int = 0,
) -> bytes:
    validate_page(page, last_page)
    ordered = normalize_universes(universes)
    if len(ordered) > UNIVERSES_PER_PAGE:
        raise DiscoveryPageError(
            len(ordered), f"a page holds at most {UNIVERSES_PER_PAGE} universes"
        )
    body = struct.pack(
        f">IBB{len(ordered)}H",
        VECTOR_UNIVERSE_DISCOVERY_UNIVERSE_LIST,
        page,
        last_page,
        *ordered,
    )
    return wrap_pdu(body, "universe discovery")
