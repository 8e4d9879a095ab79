"""Tests for the event model."""

import json
import time

import pytest
from pydantic import ValidationError

from config_center.core.events import DEFAULT_TIMEOUT_NS, MAX_PAYLOAD_BYTES, Event
from config_center.errors import InvalidEventKeyError, SerializationError


@pytest.mark.parametrize("key", ["a", "alpha", "chirs", "a1-b2", "test-event-9", "x-"])
def test_create_accepts_valid_keys(key: str):
    event = Event.create(key)
    assert event.key == key


@pytest.mark.parametrize("key", ["", "Alpha", "1abc", "a_b", "a.b", "a b", "-a", "abc!", "ALPHA"])
def test_create_rejects_invalid_keys(key: str):
    with pytest.raises(InvalidEventKeyError):
        Event.create(key)


def test_create_defaults():
    event = Event.create("alpha")
    assert event.timeout == DEFAULT_TIMEOUT_NS == 10_000_000_000
    assert event.body == {}
    assert event.pub_time == 0
    assert event.is_published() is False


def test_add_data_is_chainable_and_overwrites():
    event = Event.create("alpha").add_data("name", "zhou").add_data("age", 3)
    event.add_data("name", "chirs")
    assert event.body == {"name": "chirs", "age": 3}
    assert event.get_data("age") == 3
    assert event.get_data("missing") is None


def test_mark_published():
    before = time.time_ns()
    event = Event.create("alpha").mark_published()
    assert event.is_published() is True
    assert event.pub_time >= before


def test_key_is_immutable():
    event = Event.create("alpha")
    with pytest.raises(ValidationError):
        event.key = "beta"  # type: ignore
    assert event.key == "alpha"


def test_is_timed_out():
    event = Event.create("alpha", timeout=1_000_000_000).mark_published()
    assert event.is_timed_out() is False

    event.pub_time = time.time_ns() - 2_000_000_000
    assert event.is_timed_out() is True


def test_is_overloaded_boundary():
    event = Event.create("pad").add_data("p", "")
    base = len(event.serialize())

    event.add_data("p", "x" * (MAX_PAYLOAD_BYTES - base))
    assert len(event.serialize()) == 1024
    assert event.is_overloaded() is False

    event.add_data("p", "x" * (MAX_PAYLOAD_BYTES + 1 - base))
    assert len(event.serialize()) == 1025
    assert event.is_overloaded() is True


def test_wire_format_fields():
    event = Event.create("alpha").add_data("n", 1).mark_published()
    data = json.loads(event.serialize())
    assert set(data) == {"key", "pub_time", "timeout", "body", "published"}
    assert data["key"] == "alpha"
    assert data["pub_time"] == event.pub_time
    assert data["body"] == {"n": 1}
    assert data["published"] is True


def test_round_trip():
    event = Event.create("chirs", 10000).add_data("name", "zhou").mark_published()

    decoded = Event.deserialize(event.serialize())

    assert decoded.key == "chirs"
    assert decoded.body == {"name": "zhou"}
    assert decoded.pub_time == event.pub_time
    assert decoded.timeout == 10000
    assert decoded.published is True


def test_serialize_unserializable_body():
    event = Event.create("alpha").add_data("obj", object())
    with pytest.raises(SerializationError):
        event.serialize()


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not json",
        "[1, 2]",
        '{"body": {}}',
        '{"key": "Bad Key", "pub_time": 1, "timeout": 1, "body": {}, "published": true}',
    ],
)
def test_deserialize_malformed(raw: str):
    with pytest.raises(SerializationError):
        Event.deserialize(raw)
