import logging
import threading

from event_log import EventLog


def test_lines_are_recorded_without_subscribers():
    log = EventLog(history=3)
    for i in range(5):
        log.emit(f"line {i}")
    history = log.history()
    assert len(history) == 3
    assert history[-1].endswith("line 4")


def test_subscriber_receives_only_lines_after_subscribing():
    log = EventLog()
    log.emit("before")
    subscription = log.subscribe()
    log.emit("after")
    log.warning("careful")
    lines = subscription.drain()
    assert len(lines) == 2
    assert lines[0].endswith("after")
    assert lines[1].endswith("careful")
    assert subscription.drain() == []


def test_closed_subscription_stops_receiving_and_iteration_ends():
    log = EventLog()
    subscription = log.subscribe()
    log.emit("one")
    subscription.close()
    log.emit("two")
    assert [line.split("] ", 1)[1] for line in subscription] == ["one"]


def test_iteration_consumes_lines_from_another_thread():
    log = EventLog()
    subscription = log.subscribe()
    received = []

    def consume():
        for line in subscription:
            received.append(line)

    consumer = threading.Thread(target=consume)
    consumer.start()
    log.emit("hello")
    subscription.close()
    consumer.join(2)
    assert not consumer.is_alive()
    assert received and received[0].endswith("hello")


def test_lines_go_through_standard_logging(caplog):
    log = EventLog()
    with caplog.at_level(logging.INFO, logger="elevator_sim"):
        log.emit("[电梯 0] 开门")
        log.warning("[调度器] 丢弃")
    assert ("elevator_sim", logging.INFO, "[电梯 0] 开门") in caplog.record_tuples
    assert ("elevator_sim", logging.WARNING, "[调度器] 丢弃") in caplog.record_tuples


def test_undrained_subscription_keeps_only_newest_lines():
    log = EventLog(history=500)
    subscription = log.subscribe(max_lines=200)
    for i in range(5000):
        log.emit(f"line {i}")

    assert subscription.pending() == 200
    assert subscription.dropped == 4800
    lines = subscription.drain()
    assert lines[0].endswith("line 4800")
    assert lines[-1].endswith("line 4999")


def test_default_subscription_bound_matches_history():
    log = EventLog(history=50)
    subscription = log.subscribe()
    for i in range(120):
        log.emit(f"line {i}")
    assert subscription.pending() == 50
    assert len(log.history()) == 50
