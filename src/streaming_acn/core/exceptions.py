"""
Custom Exceptions for Streaming ACN.

Provides a hierarchy of exceptions for the packet codec and its
configuration, so callers can tell bad input apart from bad setup.
"""

from __future__ import annotations

from typing import Any


class E131Error(Exception):
    """Base exception for all Streaming ACN errors."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(E131Error):
    """Input rejected before any packet byte was produced."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(f"Invalid {field} {value!r}: {reason}", recoverable=True)
        self.field = field
        self.value = value
        self.reason = reason


class SourceNameError(ValidationError):
    """Source name is empty or does not fit the 64-byte field."""

    def __init__(self, value: Any, reason: str):
        super().__init__("source name", value, reason)


class PriorityError(ValidationError):
    """Priority outside 0-200."""

    def __init__(self, value: Any):
        super().__init__("priority", value, "must be an integer from 0 to 200")


class ComponentIdError(ValidationError):
    """Component identifier is not a 16-byte UUID."""

    def __init__(self, value: Any, reason: str):
        super().__init__("component identifier", value, reason)


class UniverseNumberError(ValidationError):
    """Universe number outside 1-63999."""

    def __init__(self, value: Any):
        super().__init__("universe number", value, "must be from 1 to 63999")


class SlotCountError(ValidationError):
    """Universe does not carry exactly 512 slots."""

    def __init__(self, count: int):
        super().__init__("slot count", count, "a universe carries exactly 512 slots")


class SlotValueError(ValidationError):
    """Slot data is not a sequence of 8-bit values."""

    def __init__(self, value: Any, reason: str):
        super().__init__("slot data", value, reason)


class SyncAddressError(ValidationError):
    """Synchronization address outside the universe range."""

    def __init__(self, value: Any, reason: str):
        super().__init__("synchronization address", value, reason)


class SequenceNumberError(ValidationError):
    """Sequence number is not an integer."""

    def __init__(self, value: Any):
        super().__init__("sequence number", value, "must be an integer")


class OptionFlagsError(ValidationError):
    """Options byte sets reserved bits."""

    def __init__(self, value: Any, reason: str):
        super().__init__("option flags", value, reason)


class DiscoveryPageError(ValidationError):
    """Universe discovery list does not fit the requested page."""

    def __init__(self, value: Any, reason: str):
        super().__init__("discovery page", value, reason)


class LayerLengthError(ValidationError):
    """A PDU length does not fit the 12-bit Flags-and-Length field."""

    def __init__(self, layer: str, length: int):
        super().__init__(
            f"{layer} layer length", length, "exceeds the 12-bit limit of 4095"
        )
        self.layer = layer


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(E131Error):
    """Startup configuration could not be loaded or applied."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Configuration error in {source}: {reason}", recoverable=False
        )
        self.source = source
        self.reason = reason
