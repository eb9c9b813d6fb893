from core.events.domain_events import domain_events
from core.events.signal import Signal


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(task_id: str) -> None:
        seen.append(task_id)

    domain_events.tasks_changed.connect(_handler)
    domain_events.tasks_changed.emit("t-1")
    domain_events.tasks_changed.disconnect(_handler)
    domain_events.tasks_changed.emit("t-2")

    assert seen == ["t-1"]


def test_signal_connect_is_idempotent():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    def _handler(payload: str) -> None:
        seen.append(payload)

    signal.connect(_handler)
    signal.connect(_handler)
    assert signal.subscriber_count() == 1

    signal.emit("x")
    assert seen == ["x"]

    signal.disconnect(_handler)
    signal.disconnect(_handler)
    assert signal.subscriber_count() == 0


def test_signal_emit_prunes_dead_proxy_callbacks():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _DeadProxyCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise ReferenceError("weakly-referenced object no longer exists")

    dead = _DeadProxyCallback()

    def _ok(payload: str) -> None:
        seen.append(payload)

    signal.connect(dead)
    signal.connect(_ok)

    signal.emit("d-1")
    signal.emit("d-2")

    assert dead.calls == 1
    assert seen == ["d-1", "d-2"]
    assert signal.subscriber_count() == 1


def test_signal_emit_keeps_other_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    try:
        signal.emit("x")
        assert False, "Expected RuntimeError to propagate"
    except RuntimeError as exc:
        assert str(exc) == "boom"
    assert signal.subscriber_count() == 1
