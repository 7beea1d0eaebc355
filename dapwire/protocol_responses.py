"""Protocol responses, keyed by type name and by the command they answer."""

from __future__ import annotations

import functools
from typing import Any, Iterable

from dapwire.protocol_types import (
    BREAKPOINT,
    BREAKPOINT_LOCATION,
    COMPLETION_ITEM,
    DISASSEMBLED_INSTRUCTION,
    EXCEPTION_DETAILS,
    GOTO_TARGET,
    MESSAGE,
    MODULE,
    SCOPE,
    SOURCE,
    STACK_FRAME,
    STEP_IN_TARGET,
    THREAD,
    VARIABLE,
    VARIABLE_PRESENTATION_HINT,
    capability_fields,
)
from dapwire.serialization import (
    DeserializeError,
    Field,
    StructType,
    to_array,
    to_boolean,
    to_integer,
    to_string,
)

_SUFFIX = "Response"
_ERROR_RESPONSE_NAME = "ErrorResponse"


def _req(name: str, decode: Any = None, key: str | None = None) -> Field:
    return Field(name, key=key, decode=decode)


def _opt(name: str, decode: Any = None, key: str | None = None) -> Field:
    return Field(name, key=key, decode=decode, optional=True)


def _array(item: Any) -> functools.partial:
    return functools.partial(to_array, item=item)


def _string_or_null(value: Any) -> str | None:
    """Decode a value that is either a string or null."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    raise DeserializeError("expected a string or null")


def _response(name: str, fields: Iterable[Field] = ()) -> StructType:
    return StructType(name, "", fields)


def _breakpoints_response(name: str, optional: bool = False) -> StructType:
    make = _opt if optional else _req
    return _response(name, [make("breakpoints", _array(BREAKPOINT))])


ATTACH_RESPONSE = _response("AttachResponse")

BREAKPOINT_LOCATIONS_RESPONSE = _response(
    "BreakpointLocationsResponse",
    [_req("breakpoints", _array(BREAKPOINT_LOCATION))],
)

CANCEL_RESPONSE = _response("CancelResponse")

COMPLETIONS_RESPONSE = _response(
    "CompletionsResponse", [_req("targets", _array(COMPLETION_ITEM))]
)

CONFIGURATION_DONE_RESPONSE = _response("ConfigurationDoneResponse")

CONTINUE_RESPONSE = _response(
    "ContinueResponse", [_opt("allThreadsContinued", to_boolean)]
)

DATA_BREAKPOINT_INFO_RESPONSE = _response(
    "DataBreakpointInfoResponse",
    [
        _opt("accessTypes", _array(to_string)),
        _opt("canPersist", to_boolean),
        _req("dataId", _string_or_null),
        _req("description", to_string),
    ],
)

DISASSEMBLE_RESPONSE = _response(
    "DisassembleResponse", [_req("instructions", _array(DISASSEMBLED_INSTRUCTION))]
)

DISCONNECT_RESPONSE = _response("DisconnectResponse")

ERROR_RESPONSE = _response(_ERROR_RESPONSE_NAME, [_opt("error", MESSAGE)])

EVALUATE_RESPONSE = _response(
    "EvaluateResponse",
    [
        _opt("indexedVariables", to_integer),
        _opt("memoryReference", to_string),
        _opt("namedVariables", to_integer),
        _opt("presentationHint", VARIABLE_PRESENTATION_HINT),
        _req("result", to_string),
        _opt("type", to_string),
        _req("variablesReference", to_integer),
    ],
)

EXCEPTION_INFO_RESPONSE = _response(
    "ExceptionInfoResponse",
    [
        _req("breakMode", to_string),
        _opt("description", to_string),
        _opt("details", EXCEPTION_DETAILS),
        _req("exceptionId", to_string),
    ],
)

GOTO_RESPONSE = _response("GotoResponse")

GOTO_TARGETS_RESPONSE = _response(
    "GotoTargetsResponse", [_req("targets", _array(GOTO_TARGET))]
)

INITIALIZE_RESPONSE = _response("InitializeResponse", capability_fields())

LAUNCH_RESPONSE = _response("LaunchResponse")

LOADED_SOURCES_RESPONSE = _response(
    "LoadedSourcesResponse", [_req("sources", _array(SOURCE))]
)

MODULES_RESPONSE = _response(
    "ModulesResponse",
    [_req("modules", _array(MODULE)), _opt("totalModules", to_integer)],
)

NEXT_RESPONSE = _response("NextResponse")

PAUSE_RESPONSE = _response("PauseResponse")

READ_MEMORY_RESPONSE = _response(
    "ReadMemoryResponse",
    [
        _req("address", to_string),
        _opt("data", to_string),
        _opt("unreadableBytes", to_integer),
    ],
)

RESTART_FRAME_RESPONSE = _response("RestartFrameResponse")

RESTART_RESPONSE = _response("RestartResponse")

REVERSE_CONTINUE_RESPONSE = _response("ReverseContinueResponse")

RUN_IN_TERMINAL_RESPONSE = _response(
    "RunInTerminalResponse",
    [_opt("processId", to_integer), _opt("shellProcessId", to_integer)],
)

SCOPES_RESPONSE = _response("ScopesResponse", [_req("scopes", _array(SCOPE))])

SET_BREAKPOINTS_RESPONSE = _breakpoints_response("SetBreakpointsResponse")

SET_DATA_BREAKPOINTS_RESPONSE = _breakpoints_response("SetDataBreakpointsResponse")

SET_EXCEPTION_BREAKPOINTS_RESPONSE = _breakpoints_response(
    "SetExceptionBreakpointsResponse", optional=True
)

SET_EXPRESSION_RESPONSE = _response(
    "SetExpressionResponse",
    [
        _opt("indexedVariables", to_integer),
        _opt("memoryReference", to_string),
        _opt("namedVariables", to_integer),
        _opt("presentationHint", VARIABLE_PRESENTATION_HINT),
        _opt("type", to_string),
        _req("value", to_string),
        _opt("variablesReference", to_integer),
    ],
)

SET_FUNCTION_BREAKPOINTS_RESPONSE = _breakpoints_response(
    "SetFunctionBreakpointsResponse"
)

SET_INSTRUCTION_BREAKPOINTS_RESPONSE = _breakpoints_response(
    "SetInstructionBreakpointsResponse"
)

SET_VARIABLE_RESPONSE = _response(
    "SetVariableResponse",
    [
        _opt("indexedVariables", to_integer),
        _opt("memoryReference", to_string),
        _opt("namedVariables", to_integer),
        _opt("type", to_string),
        _req("value", to_string),
        _opt("variablesReference", to_integer),
    ],
)

SOURCE_RESPONSE = _response(
    "SourceResponse",
    [_req("content", to_string), _opt("mimeType", to_string)],
)

STACK_TRACE_RESPONSE = _response(
    "StackTraceResponse",
    [_req("stackFrames", _array(STACK_FRAME)), _opt("totalFrames", to_integer)],
)

START_DEBUGGING_RESPONSE = _response("StartDebuggingResponse")

STEP_BACK_RESPONSE = _response("StepBackResponse")

STEP_IN_RESPONSE = _response("StepInResponse")

STEP_IN_TARGETS_RESPONSE = _response(
    "StepInTargetsResponse", [_req("targets", _array(STEP_IN_TARGET))]
)

STEP_OUT_RESPONSE = _response("StepOutResponse")

TERMINATE_RESPONSE = _response("TerminateResponse")

TERMINATE_THREADS_RESPONSE = _response("TerminateThreadsResponse")

THREADS_RESPONSE = _response("ThreadsResponse", [_req("threads", _array(THREAD))])

VARIABLES_RESPONSE = _response(
    "VariablesResponse", [_req("variables", _array(VARIABLE))]
)

WRITE_MEMORY_RESPONSE = _response(
    "WriteMemoryResponse",
    [_opt("bytesWritten", to_integer), _opt("offset", to_integer)],
)

_RESPONSES: dict[str, StructType] = {
    t.name: t
    for t in (
        ATTACH_RESPONSE,
        BREAKPOINT_LOCATIONS_RESPONSE,
        CANCEL_RESPONSE,
        COMPLETIONS_RESPONSE,
        CONFIGURATION_DONE_RESPONSE,
        CONTINUE_RESPONSE,
        DATA_BREAKPOINT_INFO_RESPONSE,
        DISASSEMBLE_RESPONSE,
        DISCONNECT_RESPONSE,
        ERROR_RESPONSE,
        EVALUATE_RESPONSE,
        EXCEPTION_INFO_RESPONSE,
        GOTO_RESPONSE,
        GOTO_TARGETS_RESPONSE,
        INITIALIZE_RESPONSE,
        LAUNCH_RESPONSE,
        LOADED_SOURCES_RESPONSE,
        MODULES_RESPONSE,
        NEXT_RESPONSE,
        PAUSE_RESPONSE,
        READ_MEMORY_RESPONSE,
        RESTART_FRAME_RESPONSE,
        RESTART_RESPONSE,
        REVERSE_CONTINUE_RESPONSE,
        RUN_IN_TERMINAL_RESPONSE,
        SCOPES_RESPONSE,
        SET_BREAKPOINTS_RESPONSE,
        SET_DATA_BREAKPOINTS_RESPONSE,
        SET_EXCEPTION_BREAKPOINTS_RESPONSE,
        SET_EXPRESSION_RESPONSE,
        SET_FUNCTION_BREAKPOINTS_RESPONSE,
        SET_INSTRUCTION_BREAKPOINTS_RESPONSE,
        SET_VARIABLE_RESPONSE,
        SOURCE_RESPONSE,
        STACK_TRACE_RESPONSE,
        START_DEBUGGING_RESPONSE,
        STEP_BACK_RESPONSE,
        STEP_IN_RESPONSE,
        STEP_IN_TARGETS_RESPONSE,
        STEP_OUT_RESPONSE,
        TERMINATE_RESPONSE,
        TERMINATE_THREADS_RESPONSE,
        THREADS_RESPONSE,
        VARIABLES_RESPONSE,
        WRITE_MEMORY_RESPONSE,
    )
}


def _command_of(type_name: str) -> str:
    stem = type_name[: -len(_SUFFIX)]
    return stem[:1].lower() + stem[1:]


_BY_COMMAND: dict[str, StructType] = {
    _command_of(name): t
    for name, t in _RESPONSES.items()
    if name != _ERROR_RESPONSE_NAME
}


def find_response(name: str) -> StructType:
    """Return the response type called ``name``; raise KeyError if none."""
    try:
        return _RESPONSES[name]
    except KeyError:
        raise KeyError(f"unknown response type '{name}'") from None


def response_for(command: str) -> StructType:
    """Return the response type that answers ``command``; raise KeyError if none."""
    try:
        return _BY_COMMAND[command]
    except KeyError:
        raise KeyError(f"no response for command '{command}'") from None


def response_names() -> tuple[str, ...]:
    """Return the names of all response types, in declaration order."""
    return tuple(_RESPONSES)