from __future__ import annotations

import threading
import time
import uuid

import pytest

from streaming_acn.core.config import SourceConfig
from streaming_acn.core.exceptions import (
    ComponentIdError,
    PriorityError,
    SourceNameError,
)
from streaming_acn.core.identity import (
    DEFAULT_PRIORITY,
    SourceIdentity,
    _ReadWriteLock,
    encode_source_name,
)
from streaming_acn.dmx.universe import Universe
from streaming_acn.e131.packets import build_data_packet


def test_defaults() -> None:
    identity = SourceIdentity()

    assert identity.priority == DEFAULT_PRIORITY == 100
    assert identity.source_name.startswith("streaming-acn-")
    assert len(identity.cid) == 16


def test_random_cid_differs_per_identity() -> None:
    assert SourceIdentity().cid != SourceIdentity().cid


@pytest.mark.parametrize(
    "cid",
    [
        uuid.UUID("00112233-4455-6677-8899-aabbccddeeff"),
        "00112233-4455-6677-8899-aabbccddeeff",
        bytes.fromhex("00112233445566778899aabbccddeeff"),
    ],
)
def test_cid_forms(cid: object) -> None:
    identity = SourceIdentity(cid=cid)  # type: ignore[arg-type]
    assert identity.cid == bytes.fromhex("00112233445566778899aabbccddeeff")


@pytest.mark.parametrize("cid", [b"short", "not-a-uuid", 42])
def test_cid_rejects_bad_values(cid: object) -> None:
    with pytest.raises(ComponentIdError):
        SourceIdentity(cid=cid)  # type: ignore[arg-type]


@pytest.mark.parametrize("name", ["", "x" * 64, "abc\x00hidden"])
def test_set_source_name_rejects_invalid_names(name: str) -> None:
    identity = SourceIdentity(source_name="original")

    with pytest.raises(SourceNameError):
        identity.set_source_name(name)

    assert identity.source_name == "original"


def test_set_source_name_accepts_63_bytes() -> None:
    identity = SourceIdentity()
    name = "x" * 63

    identity.set_source_name(name)

    assert identity.source_name == name


def test_source_name_limit_counts_utf8_bytes() -> None:
    # 32 two-byte characters = 64 bytes
    with pytest.raises(SourceNameError):
        encode_source_name("é" * 32)
    assert len(encode_source_name("é" * 31)) == 64


def test_encode_source_name_zero_pads() -> None:
    field = encode_source_name("abc")
    assert field == b"abc" + bytes(61)


@pytest.mark.parametrize("priority", [-1, 201])
def test_set_priority_rejects_out_of_range(priority: int) -> None:
    identity = SourceIdentity()

    with pytest.raises(PriorityError):
        identity.set_priority(priority)

    assert identity.priority == 100


@pytest.mark.parametrize("priority", [0, 200])
def test_set_priority_accepts_bounds(priority: int) -> None:
    identity = SourceIdentity()
    identity.set_priority(priority)
    assert identity.priority == priority


def test_constructor_validates_priority() -> None:
    with pytest.raises(PriorityError):
        SourceIdentity(priority=300)


def test_from_config() -> None:
    cid = uuid.uuid4()
    identity = SourceIdentity.from_config(
        SourceConfig(cid=cid, source_name="Stage left", priority=120)
    )

    assert identity.cid_uuid == cid
    assert identity.source_name == "Stage left"
    assert identity.priority == 120


def test_snapshot_is_consistent() -> None:
    identity = SourceIdentity(source_name="one", priority=1)
    snapshot = identity.snapshot()

    identity.set_source_name("two")
    identity.set_priority(2)

    assert snapshot.source_name == "one"
    assert snapshot.priority == 1
    assert snapshot.source_name_field == encode_source_name("one")


def test_concurrent_updates_never_mix_identities() -> None:
    identity = SourceIdentity(source_name="alpha", priority=10)
    pairs = {
        encode_source_name("alpha"): 10,
        encode_source_name("beta"): 20,
    }
    universe = Universe(number=1)
    errors: list[str] = []
    stop = threading.Event()

    def writer() -> None:
        while not stop.is_set():
            for name, priority in (("beta", 20), ("alpha", 10)):
                identity.set_source_name(name)
                identity.set_priority(priority)

    def reader() -> None:
        for _ in range(300):
            packet = build_data_packet(identity, 0, 0, 0, universe)
            name_field = packet[44:108]
            if name_field not in pairs:
                errors.append(f"unexpected name {name_field!r}")

    writer_thread = threading.Thread(target=writer)
    readers = [threading.Thread(target=reader) for _ in range(4)]
    writer_thread.start()
    for thread in readers:
        thread.start()
    for thread in readers:
        thread.join()
    stop.set()
    writer_thread.join()

    assert errors == []


def test_waiting_writer_is_not_overtaken_by_later_readers() -> None:
    lock = _ReadWriteLock()
    order: list[str] = []
    first_reader_in = threading.Event()
    release_first_reader = threading.Event()

    def first_reader() -> None:
        with lock.read():
            first_reader_in.set()
            release_first_reader.wait(timeout=5)

    def writer() -> None:
        with lock.write():
            order.append("writer")

    def late_reader() -> None:
        with lock.read():
            order.append("late reader")

    holder = threading.Thread(target=first_reader)
    holder.start()
    assert first_reader_in.wait(timeout=5)

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    while lock._writers_waiting == 0:
        time.sleep(0.001)

    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    release_first_reader.set()
    for thread in (holder, writer_thread, reader_thread):
        thread.join(timeout=5)

    assert order == ["writer", "late reader"]
