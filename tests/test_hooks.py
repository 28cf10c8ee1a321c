import logging

from ariadne_storage.hooks import DELETE, WRITE, HookBus


def test_hook_bus_invokes_event_specific_handlers():
    bus = HookBus()
    captured = []

    def handler(event, payload):
        captured.append((event, payload))

    bus.subscribe(WRITE, handler)
    bus.emit(WRITE, path="a.txt", size=1)
    bus.emit(DELETE, path="a.txt")

    assert captured == [(WRITE, {"path": "a.txt", "size": 1})]


def test_hook_bus_runs_named_handlers_before_global_ones():
    bus = HookBus()
    order = []

    bus.subscribe_all(lambda event, payload: order.append("all"))
    bus.subscribe(WRITE, lambda event, payload: order.append("write"))
    bus.emit(WRITE)
    bus.emit(DELETE)

    assert order == ["write", "all", "all"]


def test_hook_bus_survives_failing_handlers(caplog):
    bus = HookBus()
    captured = []

    def broken(event, payload):
        raise RuntimeError("observer bug")

    bus.subscribe_all(broken)
    bus.subscribe_all(lambda event, payload: captured.append(event))

    with caplog.at_level(logging.WARNING, logger="ariadne_storage.hooks"):
        bus.emit(WRITE)

    assert captured == [WRITE]
    assert "failed on storage:write" in caplog.text
