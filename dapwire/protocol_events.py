"""Protocol events, keyed by their wire event name."""

from __future__ import annotations

from dapwire.protocol_types import (
    BREAKPOINT,
    CAPABILITIES,
    MODULE,
    SOURCE,
    FieldSpec,
    array_of,
    fields,
)
from dapwire.serialization import (
    StructType,
    to_boolean,
    to_integer,
    to_number,
    to_string,
)

_THREAD_ID = ("threadId", to_integer)
_REASON = ("reason", to_string)
_PROGRESS = (
    ("message?", to_string),
    ("percentage?", to_number),
    ("progressId", to_string),
)


def _event(name: str, event: str, *specs: FieldSpec) -> StructType:
    return StructType(name, event, fields(*specs))


_EVENTS: dict[str, StructType] = {
    t.wire_name: t
    for t in (
        _event(
            "BreakpointEvent", "breakpoint", ("breakpoint", BREAKPOINT), _REASON
        ),
        _event("CapabilitiesEvent", "capabilities", ("capabilities", CAPABILITIES)),
        _event(
            "ContinuedEvent",
            "continued",
            ("allThreadsContinued?", to_boolean),
            _THREAD_ID,
        ),
        _event("ExitedEvent", "exited", ("exitCode", to_integer)),
        _event("InitializedEvent", "initialized"),
        _event(
            "InvalidatedEvent",
            "invalidated",
            ("areas?", array_of(to_string)),
            ("stackFrameId?", to_integer),
            ("threadId?", to_integer),
        ),
        _event("LoadedSourceEvent", "loadedSource", _REASON, ("source", SOURCE)),
        _event(
            "MemoryEvent",
            "memory",
            ("count", to_integer),
            ("memoryReference", to_string),
            ("offset", to_integer),
        ),
        _event("ModuleEvent", "module", ("module", MODULE), _REASON),
        _event(
            "OutputEvent",
            "output",
            ("category?", to_string),
            ("column?", to_integer),
            ("data?", None),
            ("group?", to_string),
            ("line?", to_integer),
            ("output", to_string),
            ("source?", SOURCE),
            ("variablesReference?", to_integer),
        ),
        _event(
            "ProcessEvent",
            "process",
            ("isLocalProcess?", to_boolean),
            ("name", to_string),
            ("pointerSize?", to_integer),
            ("startMethod?", to_string),
            ("systemProcessId?", to_integer),
        ),
        _event(
            "ProgressEndEvent",
            "progressEnd",
            ("message?", to_string),
            ("progressId", to_string),
        ),
        _event(
            "ProgressStartEvent",
            "progressStart",
            ("cancellable?", to_boolean),
            *_PROGRESS,
            ("requestId?", to_integer),
            ("title", to_string),
        ),
        _event("ProgressUpdateEvent", "progressUpdate", *_PROGRESS),
        _event(
            "StoppedEvent",
            "stopped",
            ("allThreadsStopped?", to_boolean),
            ("description?", to_string),
            ("hitBreakpointIds?", array_of(to_integer)),
            ("preserveFocusHint?", to_boolean),
            _REASON,
            ("text?", to_string),
            ("threadId?", to_integer),
        ),
        _event("TerminatedEvent", "terminated", ("restart?", None)),
        _event("ThreadEvent", "thread", _REASON, _THREAD_ID),
    )
}


def find_event(event: str) -> StructType:
    """Return the event type with the wire name ``event``; raise KeyError if none."""
    try:
        return _EVENTS[event]
    except KeyError:
        raise KeyError(f"unknown event '{event}'") from None


def event_names() -> tuple[str, ...]:
    """Return the wire names of all events, in declaration order."""
    return tuple(_EVENTS)