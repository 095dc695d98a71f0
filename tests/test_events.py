import pytest

from statusboard import EventEmitter


def test_handlers_run_in_subscription_order():
    emitter = EventEmitter()
    calls = []
    emitter.subscribe("tick", lambda n: calls.append(("a", n)))
    emitter.subscribe("tick", lambda n: calls.append(("b", n)))
    emitter.emit("tick", 1)
    assert calls == [("a", 1), ("b", 1)]


def test_handler_may_unsubscribe_itself_during_dispatch():
    emitter = EventEmitter()
    calls = []
    holder = {}

    def once(value):
        calls.append(value)
        emitter.unsubscribe(holder["sub"])

    holder["sub"] = emitter.subscribe("tick", once)
    emitter.subscribe("tick", lambda value: calls.append(value * 10))
    emitter.emit("tick", 1)
    emitter.emit("tick", 2)
    assert calls == [1, 10, 20]
    assert emitter.listener_count("tick") == 1


def test_handler_errors_propagate_to_the_emitter():
    emitter = EventEmitter()

    def boom():
        raise RuntimeError("handler failed")

    emitter.subscribe("tick", boom)
    with pytest.raises(RuntimeError, match="handler failed"):
        emitter.emit("tick")


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        EventEmitter().subscribe("tick", "not callable")


def test_unsubscribe_none_is_a_noop():
    assert EventEmitter().unsubscribe(None) is False
