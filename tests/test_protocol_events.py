import pytest

from dapwire.protocol_events import event_names, find_event
from dapwire.protocol_types import find_type
from dapwire.serialization import DeserializeError, dumps, parse_json

EXPECTED_EVENTS = {
    "breakpoint",
    "capabilities",
    "continued",
    "exited",
    "initialized",
    "invalidated",
    "loadedSource",
    "memory",
    "module",
    "output",
    "process",
    "progressEnd",
    "progressStart",
    "progressUpdate",
    "stopped",
    "terminated",
    "thread",
}


def test_event_names_match_protocol():
    names = event_names()
    assert set(names) == EXPECTED_EVENTS
    assert len(names) == len(set(names))


@pytest.mark.parametrize("event", sorted(EXPECTED_EVENTS))
def test_find_event_returns_type_with_wire_name(event):
    found = find_event(event)
    assert found.wire_name == event
    assert found.name.endswith("Event")


def test_find_event_unknown_raises():
    with pytest.raises(KeyError):
        find_event("no-such-event")


def test_stopped_event_wire_encoding():
    stopped = find_event("stopped")
    ev = stopped.create(reason="step", threadId=100)
    assert stopped.serialize(ev) == {"reason": "step", "threadId": 100}
    assert dumps(ev) == '{"reason":"step","threadId":100}'


def test_stopped_event_round_trip_through_json():
    stopped = find_event("stopped")
    ev = stopped.create(
        reason="breakpoint", threadId=7, hitBreakpointIds=[1, 2], allThreadsStopped=True
    )
    back = stopped.deserialize(dumps(ev))
    assert back == ev


def test_initialized_event_has_no_fields():
    initialized = find_event("initialized")
    ev = initialized.create()
    assert initialized.serialize(ev) == {}
    assert initialized.deserialize({}) == ev


def test_required_field_defaults():
    cont = find_event("continued")
    assert cont.serialize(cont.create()) == {"threadId": 0}


def test_missing_required_field_raises():
    with pytest.raises(DeserializeError):
        find_event("thread").deserialize({"reason": "started"})


def test_wrong_field_type_raises():
    with pytest.raises(DeserializeError):
        find_event("exited").deserialize({"exitCode": "zero"})


def test_output_event_keeps_arbitrary_data():
    output = find_event("output")
    payload = {"output": "hi", "data": {"a": [1, 2.5, None, True]}}
    ev = output.deserialize(payload)
    assert ev.data == {"a": [1, 2.5, None, True]}
    assert output.serialize(ev) == payload


def test_breakpoint_event_nested_struct():
    bp_event = find_event("breakpoint")
    ev = bp_event.deserialize(
        {"reason": "changed", "breakpoint": {"verified": True, "line": 3}}
    )
    assert ev.breakpoint.verified is True
    assert ev.breakpoint.line == 3
    assert isinstance(ev.breakpoint, find_type("Breakpoint").cls)
    assert parse_json(dumps(ev)) == {
        "reason": "changed",
        "breakpoint": {"verified": True, "line": 3},
    }


def test_progress_percentage_accepts_integer():
    ev = find_event("progressUpdate").deserialize({"progressId": "p", "percentage": 50})
    assert ev.percentage == 50.0
    assert isinstance(ev.percentage, float)


def test_terminated_restart_any_kind():
    term = find_event("terminated")
    ev = term.deserialize({"restart": [1, "x"]})
    assert ev.restart == [1, "x"]
    assert term.serialize(term.create()) == {}