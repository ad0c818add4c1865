"""Tests for the in-process event bus."""

import logging

from tradejournal.domain.events import EventBus, FileErrorEvent, TradesImportedEvent


def test_publish_reaches_subscribers_of_the_type():
    bus = EventBus()
    imported, errors = [], []
    bus.subscribe(TradesImportedEvent, imported.append)
    bus.subscribe(FileErrorEvent, errors.append)

    bus.publish(TradesImportedEvent(count=3, account_id=1))

    assert imported == [TradesImportedEvent(count=3, account_id=1)]
    assert errors == []


def test_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(TradesImportedEvent, received.append)

    unsubscribe()
    unsubscribe()
    bus.publish(TradesImportedEvent(count=1, account_id=1))

    assert received == []


def test_failing_handler_does_not_reach_publisher(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(TradesImportedEvent, broken)
    bus.subscribe(TradesImportedEvent, received.append)

    with caplog.at_level(logging.ERROR):
        bus.publish(TradesImportedEvent(count=1, account_id=1))

    assert len(received) == 1
    assert "Event handler failed" in caplog.text


def test_publish_without_subscribers():
    EventBus().publish(TradesImportedEvent(count=1, account_id=1))
