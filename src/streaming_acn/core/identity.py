"""
Source identity shared by every packet a process emits.

The component identifier, source name and priority are read on every
encode and may be changed at runtime from another thread, so access
goes through a readers-writer lock and encoders work from an immutable
snapshot.
"""

from __future__ import annotations

import os
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Union

import structlog

from streaming_acn.core.config import SourceConfig
from streaming_acn.core.exceptions import (
    ComponentIdError,
    PriorityError,
    SourceNameError,
)

logger = structlog.get_logger()

SOURCE_NAME_FIELD_SIZE = 64
SOURCE_NAME_MAX_BYTES = SOURCE_NAME_FIELD_SIZE - 1
PRIORITY_MIN = 0
PRIORITY_MAX = 200
DEFAULT_PRIORITY = 100
CID_SIZE = 16


def default_source_name() -> str:
    return f"streaming-acn-{os.getpid()}"


def encode_source_name(name: str) -> bytes:
    """
    Encode a source name into its fixed 64-byte, zero-padded field.

    Names longer than 63 UTF-8 bytes are rejected, never truncated, so
    the field always ends in at least one NUL.
    """
    if not isinstance(name, str):
        raise SourceNameError(name, "must be a string")
    encoded = name.encode("utf-8")
    if not encoded:
        raise SourceNameError(name, "cannot be empty")
    if b"\x00" in encoded:
        raise SourceNameError(name, "cannot contain NUL characters")
    if len(encoded) > SOURCE_NAME_MAX_BYTES:
        raise SourceNameError(
            name, f"{len(encoded)} bytes exceeds {SOURCE_NAME_MAX_BYTES}"
        )
    return encoded.ljust(SOURCE_NAME_FIELD_SIZE, b"\x00")


def validate_priority(priority: int) -> int:
    if (
        not isinstance(priority, int)
        or isinstance(priority, bool)
        or not PRIORITY_MIN <= priority <= PRIORITY_MAX
    ):
        raise PriorityError(priority)
    return priority


def coerce_cid(cid: Union[uuid.UUID, bytes, str, None]) -> bytes:
    """Return the 16 raw bytes of a component identifier."""
    if cid is None:
        return uuid.uuid4().bytes
    if isinstance(cid, uuid.UUID):
        return cid.bytes
    if isinstance(cid, (bytes, bytearray)):
        if len(cid) != CID_SIZE:
            raise ComponentIdError(cid, f"must be {CID_SIZE} bytes, got {len(cid)}")
        return bytes(cid)
    if isinstance(cid, str):
        try:
            return uuid.UUID(cid).bytes
        except ValueError as e:
            raise ComponentIdError(cid, "not a valid UUID string") from e
    raise ComponentIdError(cid, "must be a UUID, 16 bytes or a UUID string")


@dataclass(frozen=True)
class SourceSnapshot:
    """Consistent view of a SourceIdentity for a single encode."""

    cid: bytes
    source_name: str
    priority: int
    source_name_field: bytes


class _ReadWriteLock:
    """Many concurrent readers or one writer; waiting writers go first."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class SourceIdentity:
    """
    Component identifier, source name and priority of one sACN source.

    The component identifier is fixed for the lifetime of the object.
    Name and priority can be changed concurrently with encoding; each
    setter validates before taking the write lock, so a rejected value
    leaves the identity untouched.
    """

    def __init__(
        self,
        cid: Union[uuid.UUID, bytes, str, None] = None,
        source_name: Optional[str] = None,
        priority: int = DEFAULT_PRIORITY,
    ):
        if source_name is None:
            source_name = default_source_name()

        self._lock = _ReadWriteLock()
        self._cid = coerce_cid(cid)
        self._source_name_field = encode_source_name(source_name)
        self._source_name = source_name
        self._priority = validate_priority(priority)

    @classmethod
    def from_config(cls, config: SourceConfig) -> "SourceIdentity":
        """Build the identity described by a SourceConfig."""
        identity = cls(
            cid=config.cid,
            source_name=config.source_name,
            priority=config.priority,
        )
        logger.info(
            "Source identity configured",
            cid=str(identity.cid_uuid),
            source_name=identity.source_name,
            priority=identity.priority,
        )
        return identity

    @property
    def cid(self) -> bytes:
        return self._cid

    @property
    def cid_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self._cid)

    @property
    def source_name(self) -> str:
        with self._lock.read():
            return self._source_name

    @property
    def priority(self) -> int:
        with self._lock.read():
            return self._priority

    def set_source_name(self, name: str) -> None:
        """Set the user-visible source name (1-63 UTF-8 bytes)."""
        encoded = encode_source_name(name)
        with self._lock.write():
            self._source_name = name
            self._source_name_field = encoded
        logger.info("Source name updated", source_name=name)

    def set_priority(self, priority: int) -> None:
        """Set the source priority (0-200, higher wins)."""
        validate_priority(priority)
        with self._lock.write():
            self._priority = priority
        logger.info("Priority updated", priority=priority)

    def snapshot(self) -> SourceSnapshot:
        with self._lock.read():
            return SourceSnapshot(
                cid=self._cid,
                source_name=self._source_name,
                priority=self._priority,
                source_name_field=self._source_name_field,
            )
