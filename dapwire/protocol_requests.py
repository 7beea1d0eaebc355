"""Protocol requests, keyed by their wire command name."""

from __future__ import annotations

import functools
from typing import Any, Iterable

from dapwire.protocol_types import (
    DATA_BREAKPOINT,
    EXCEPTION_FILTER_OPTIONS,
    EXCEPTION_OPTIONS,
    FUNCTION_BREAKPOINT,
    INSTRUCTION_BREAKPOINT,
    SOURCE,
    SOURCE_BREAKPOINT,
    STACK_FRAME_FORMAT,
    VALUE_FORMAT,
)
from dapwire.serialization import (
    Field,
    StructType,
    to_array,
    to_boolean,
    to_integer,
    to_object,
    to_string,
)


def _req(name: str, decode: Any = None, key: str | None = None) -> Field:
    return Field(name, key=key, decode=decode)


def _opt(name: str, decode: Any = None, key: str | None = None) -> Field:
    return Field(name, key=key, decode=decode, optional=True)


def _array(item: Any) -> functools.partial:
    return functools.partial(to_array, item=item)


def _request(name: str, command: str, fields: Iterable[Field] = ()) -> StructType:
    return StructType(name, command, fields)


def _stepping_fields() -> list[Field]:
    return [
        _opt("granularity", to_string),
        _opt("singleThread", to_boolean),
        _req("threadId", to_integer),
    ]


ATTACH_REQUEST = _request(
    "AttachRequest", "attach", [_opt("restart", key="__restart")]
)

BREAKPOINT_LOCATIONS_REQUEST = _request(
    "BreakpointLocationsRequest",
    "breakpointLocations",
    [
        _opt("column", to_integer),
        _opt("endColumn", to_integer),
        _opt("endLine", to_integer),
        _req("line", to_integer),
        _req("source", SOURCE),
    ],
)

CANCEL_REQUEST = _request(
    "CancelRequest",
    "cancel",
    [_opt("progressId", to_string), _opt("requestId", to_integer)],
)

COMPLETIONS_REQUEST = _request(
    "CompletionsRequest",
    "completions",
    [
        _req("column", to_integer),
        _opt("frameId", to_integer),
        _opt("line", to_integer),
        _req("text", to_string),
    ],
)

CONFIGURATION_DONE_REQUEST = _request("ConfigurationDoneRequest", "configurationDone")

CONTINUE_REQUEST = _request(
    "ContinueRequest",
    "continue",
    [_opt("singleThread", to_boolean), _req("threadId", to_integer)],
)

DATA_BREAKPOINT_INFO_REQUEST = _request(
    "DataBreakpointInfoRequest",
    "dataBreakpointInfo",
    [
        _opt("frameId", to_integer),
        _opt("mode", to_string),
        _req("name", to_string),
        _opt("variablesReference", to_integer),
    ],
)

DISASSEMBLE_REQUEST = _request(
    "DisassembleRequest",
    "disassemble",
    [
        _req("instructionCount", to_integer),
        _opt("instructionOffset", to_integer),
        _req("memoryReference", to_string),
        _opt("offset", to_integer),
        _opt("resolveSymbols", to_boolean),
    ],
)

DISCONNECT_REQUEST = _request(
    "DisconnectRequest",
    "disconnect",
    [
        _opt("restart", to_boolean),
        _opt("suspendDebuggee", to_boolean),
        _opt("terminateDebuggee", to_boolean),
    ],
)

EVALUATE_REQUEST = _request(
    "EvaluateRequest",
    "evaluate",
    [
        _opt("context", to_string),
        _req("expression", to_string),
        _opt("format", VALUE_FORMAT),
        _opt("frameId", to_integer),
    ],
)

EXCEPTION_INFO_REQUEST = _request(
    "ExceptionInfoRequest", "exceptionInfo", [_req("threadId", to_integer)]
)

GOTO_REQUEST = _request(
    "GotoRequest",
    "goto",
    [_req("targetId", to_integer), _req("threadId", to_integer)],
)

GOTO_TARGETS_REQUEST = _request(
    "GotoTargetsRequest",
    "gotoTargets",
    [_opt("column", to_integer), _req("line", to_integer), _req("source", SOURCE)],
)

_CLIENT_SUPPORTS = (
    "supportsArgsCanBeInterpretedByShell",
    "supportsInvalidatedEvent",
    "supportsMemoryEvent",
    "supportsMemoryReferences",
    "supportsProgressReporting",
    "supportsRunInTerminalRequest",
    "supportsStartDebuggingRequest",
    "supportsVariablePaging",
    "supportsVariableType",
)

INITIALIZE_REQUEST = _request(
    "InitializeRequest",
    "initialize",
    [
        _req("adapterID", to_string),
        _opt("clientID", to_string),
        _opt("clientName", to_string),
        _opt("columnsStartAt1", to_boolean),
        _opt("linesStartAt1", to_boolean),
        _opt("locale", to_string),
        _opt("pathFormat", to_string),
        *(_opt(name, to_boolean) for name in _CLIENT_SUPPORTS),
    ],
)

LAUNCH_REQUEST = _request(
    "LaunchRequest",
    "launch",
    [_opt("restart", key="__restart"), _opt("noDebug", to_boolean)],
)

LOADED_SOURCES_REQUEST = _request("LoadedSourcesRequest", "loadedSources")

MODULES_REQUEST = _request(
    "ModulesRequest",
    "modules",
    [_opt("moduleCount", to_integer), _opt("startModule", to_integer)],
)

NEXT_REQUEST = _request("NextRequest", "next", _stepping_fields())

PAUSE_REQUEST = _request("PauseRequest", "pause", [_req("threadId", to_integer)])

READ_MEMORY_REQUEST = _request(
    "ReadMemoryRequest",
    "readMemory",
    [
        _req("count", to_integer),
        _req("memoryReference", to_string),
        _opt("offset", to_integer),
    ],
)

RESTART_FRAME_REQUEST = _request(
    "RestartFrameRequest", "restartFrame", [_req("frameId", to_integer)]
)

RESTART_REQUEST = _request("RestartRequest", "restart", [_opt("arguments")])

REVERSE_CONTINUE_REQUEST = _request(
    "ReverseContinueRequest",
    "reverseContinue",
    [_opt("singleThread", to_boolean), _req("threadId", to_integer)],
)

RUN_IN_TERMINAL_REQUEST = _request(
    "RunInTerminalRequest",
    "runInTerminal",
    [
        _req("args", _array(to_string)),
        _opt("argsCanBeInterpretedByShell", to_boolean),
        _req("cwd", to_string),
        _opt("env", to_object),
        _opt("kind", to_string),
        _opt("title", to_string),
    ],
)

SCOPES_REQUEST = _request("ScopesRequest", "scopes", [_req("frameId", to_integer)])

SET_BREAKPOINTS_REQUEST = _request(
    "SetBreakpointsRequest",
    "setBreakpoints",
    [
        _opt("breakpoints", _array(SOURCE_BREAKPOINT)),
        _opt("lines", _array(to_integer)),
        _req("source", SOURCE),
        _opt("sourceModified", to_boolean),
    ],
)

SET_DATA_BREAKPOINTS_REQUEST = _request(
    "SetDataBreakpointsRequest",
    "setDataBreakpoints",
    [_req("breakpoints", _array(DATA_BREAKPOINT))],
)

SET_EXCEPTION_BREAKPOINTS_REQUEST = _request(
    "SetExceptionBreakpointsRequest",
    "setExceptionBreakpoints",
    [
        _opt("exceptionOptions", _array(EXCEPTION_OPTIONS)),
        _opt("filterOptions", _array(EXCEPTION_FILTER_OPTIONS)),
        _req("filters", _array(to_string)),
    ],
)

SET_EXPRESSION_REQUEST = _request(
    "SetExpressionRequest",
    "setExpression",
    [
        _req("expression", to_string),
        _opt("format", VALUE_FORMAT),
        _opt("frameId", to_integer),
        _req("value", to_string),
    ],
)

SET_FUNCTION_BREAKPOINTS_REQUEST = _request(
    "SetFunctionBreakpointsRequest",
    "setFunctionBreakpoints",
    [_req("breakpoints", _array(FUNCTION_BREAKPOINT))],
)

SET_INSTRUCTION_BREAKPOINTS_REQUEST = _request(
    "SetInstructionBreakpointsRequest",
    "setInstructionBreakpoints",
    [_req("breakpoints", _array(INSTRUCTION_BREAKPOINT))],
)

SET_VARIABLE_REQUEST = _request(
    "SetVariableRequest",
    "setVariable",
    [
        _opt("format", VALUE_FORMAT),
        _req("name", to_string),
        _req("value", to_string),
        _req("variablesReference", to_integer),
    ],
)

SOURCE_REQUEST = _request(
    "SourceRequest",
    "source",
    [_opt("source", SOURCE), _req("sourceReference", to_integer)],
)

STACK_TRACE_REQUEST = _request(
    "StackTraceRequest",
    "stackTrace",
    [
        _opt("format", STACK_FRAME_FORMAT),
        _opt("levels", to_integer),
        _opt("startFrame", to_integer),
        _req("threadId", to_integer),
    ],
)

START_DEBUGGING_REQUEST = _request(
    "StartDebuggingRequest",
    "startDebugging",
    [_req("configuration", to_object), _req("request", to_string)],
)

STEP_BACK_REQUEST = _request("StepBackRequest", "stepBack", _stepping_fields())

STEP_IN_REQUEST = _request(
    "StepInRequest",
    "stepIn",
    [
        _opt("granularity", to_string),
        _opt("singleThread", to_boolean),
        _opt("targetId", to_integer),
        _req("threadId", to_integer),
    ],
)

STEP_IN_TARGETS_REQUEST = _request(
    "StepInTargetsRequest", "stepInTargets", [_req("frameId", to_integer)]
)

STEP_OUT_REQUEST = _request("StepOutRequest", "stepOut", _stepping_fields())

TERMINATE_REQUEST = _request(
    "TerminateRequest", "terminate", [_opt("restart", to_boolean)]
)

TERMINATE_THREADS_REQUEST = _request(
    "TerminateThreadsRequest",
    "terminateThreads",
    [_opt("threadIds", _array(to_integer))],
)

THREADS_REQUEST = _request("ThreadsRequest", "threads")

VARIABLES_REQUEST = _request(
    "VariablesRequest",
    "variables",
    [
        _opt("count", to_integer),
        _opt("filter", to_string),
        _opt("format", VALUE_FORMAT),
        _opt("start", to_integer),
        _req("variablesReference", to_integer),
    ],
)

WRITE_MEMORY_REQUEST = _request(
    "WriteMemoryRequest",
    "writeMemory",
    [
        _opt("allowPartial", to_boolean),
        _req("data", to_string),
        _req("memoryReference", to_string),
        _opt("offset", to_integer),
    ],
)

_REQUESTS: dict[str, StructType] = {
    t.wire_name: t
    for t in (
        ATTACH_REQUEST,
        BREAKPOINT_LOCATIONS_REQUEST,
        CANCEL_REQUEST,
        COMPLETIONS_REQUEST,
        CONFIGURATION_DONE_REQUEST,
        CONTINUE_REQUEST,
        DATA_BREAKPOINT_INFO_REQUEST,
        DISASSEMBLE_REQUEST,
        DISCONNECT_REQUEST,
        EVALUATE_REQUEST,
        EXCEPTION_INFO_REQUEST,
        GOTO_REQUEST,
        GOTO_TARGETS_REQUEST,
        INITIALIZE_REQUEST,
        LAUNCH_REQUEST,
        LOADED_SOURCES_REQUEST,
        MODULES_REQUEST,
        NEXT_REQUEST,
        PAUSE_REQUEST,
        READ_MEMORY_REQUEST,
        RESTART_FRAME_REQUEST,
        RESTART_REQUEST,
        REVERSE_CONTINUE_REQUEST,
        RUN_IN_TERMINAL_REQUEST,
        SCOPES_REQUEST,
        SET_BREAKPOINTS_REQUEST,
        SET_DATA_BREAKPOINTS_REQUEST,
        SET_EXCEPTION_BREAKPOINTS_REQUEST,
        SET_EXPRESSION_REQUEST,
        SET_FUNCTION_BREAKPOINTS_REQUEST,
        SET_INSTRUCTION_BREAKPOINTS_REQUEST,
        SET_VARIABLE_REQUEST,
        SOURCE_REQUEST,
        STACK_TRACE_REQUEST,
        START_DEBUGGING_REQUEST,
        STEP_BACK_REQUEST,
        STEP_IN_REQUEST,
        STEP_IN_TARGETS_REQUEST,
        STEP_OUT_REQUEST,
        TERMINATE_REQUEST,
        TERMINATE_THREADS_REQUEST,
        THREADS_REQUEST,
        VARIABLES_REQUEST,
        WRITE_MEMORY_REQUEST,
    )
}


def find_request(command: str) -> StructType:
    """Return the request type for ``command``; raise KeyError if none."""
    try:
        return _REQUESTS[command]
    except KeyError:
        raise KeyError(f"unknown command '{command}'") from None


def request_commands() -> tuple[str, ...]:
    """Return the commands of all requests, in declaration order."""
    return tuple(_REQUESTS)