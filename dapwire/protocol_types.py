"""Structured types shared by protocol requests, responses and events."""

from __future__ import annotations

import functools
from typing import Any

from dapwire.serialization import (
    DeserializeError,
    Field,
    StructType,
    to_array,
    to_boolean,
    to_integer,
    to_object,
    to_string,
)

FieldSpec = tuple[str, Any]


def fields(*specs: FieldSpec) -> list[Field]:
    """Build fields from ``(name, decode)`` pairs; a trailing ``?`` marks optional."""
    return [
        Field(
            name.rstrip("?"),
            key=None,
            decode=decode,
            optional=name.endswith("?"),
        )
        for name, decode in specs
    ]


def array_of(item: Any) -> functools.partial:
    """Return a decoder for an array whose items are decoded by ``item``."""
    return functools.partial(to_array, item=item)


def _integer_or_string(value: Any) -> int | str:
    """Decode a value that is either an integer or a string."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return to_integer(value)
    raise DeserializeError("expected an integer or a string")


def _sources(value: Any) -> list[Any]:
    return to_array(value, SOURCE)


def _exception_details_list(value: Any) -> list[Any]:
    return to_array(value, EXCEPTION_DETAILS)


def _type(name: str, *specs: FieldSpec) -> StructType:
    return StructType(name, "", fields(*specs))


_COLUMN = ("column?", to_integer)
_END_RANGE = (("endColumn?", to_integer), ("endLine?", to_integer))
_CONDITIONS = (("condition?", to_string), ("hitCondition?", to_string))
_VARIABLE_COUNTS = (
    ("indexedVariables?", to_integer),
    ("memoryReference?", to_string),
    ("namedVariables?", to_integer),
)

CHECKSUM = _type("Checksum", ("algorithm", to_string), ("checksum", to_string))

SOURCE = _type(
    "Source",
    ("adapterData?", None),
    ("checksums?", array_of(CHECKSUM)),
    ("name?", to_string),
    ("origin?", to_string),
    ("path?", to_string),
    ("presentationHint?", to_string),
    ("sourceReference?", to_integer),
    ("sources?", _sources),
)

BREAKPOINT = _type(
    "Breakpoint",
    _COLUMN,
    *_END_RANGE,
    ("id?", to_integer),
    ("instructionReference?", to_string),
    ("line?", to_integer),
    ("message?", to_string),
    ("offset?", to_integer),
    ("reason?", to_string),
    ("source?", SOURCE),
    ("verified", to_boolean),
)

BREAKPOINT_LOCATION = _type(
    "BreakpointLocation", _COLUMN, *_END_RANGE, ("line", to_integer)
)

COLUMN_DESCRIPTOR = _type(
    "ColumnDescriptor",
    ("attributeName", to_string),
    ("format?", to_string),
    ("label", to_string),
    ("type?", to_string),
    ("width?", to_integer),
)

BREAKPOINT_MODE = _type(
    "BreakpointMode",
    ("appliesTo", array_of(to_string)),
    ("description?", to_string),
    ("label", to_string),
    ("mode", to_string),
)

EXCEPTION_BREAKPOINTS_FILTER = _type(
    "ExceptionBreakpointsFilter",
    ("conditionDescription?", to_string),
    ("default?", to_boolean),
    ("description?", to_string),
    ("filter", to_string),
    ("label", to_string),
    ("supportsCondition?", to_boolean),
)

_CAPABILITY_FLAGS = ("supportSuspendDebuggee", "supportTerminateDebuggee")

_SUPPORTS_FLAGS = (
    "BreakpointLocationsRequest",
    "CancelRequest",
    "ClipboardContext",
    "CompletionsRequest",
    "ConditionalBreakpoints",
    "ConfigurationDoneRequest",
    "DataBreakpoints",
    "DelayedStackTraceLoading",
    "DisassembleRequest",
    "EvaluateForHovers",
    "ExceptionFilterOptions",
    "ExceptionInfoRequest",
    "ExceptionOptions",
    "FunctionBreakpoints",
    "GotoTargetsRequest",
    "HitConditionalBreakpoints",
    "InstructionBreakpoints",
    "LoadedSourcesRequest",
    "LogPoints",
    "ModulesRequest",
    "ReadMemoryRequest",
    "RestartFrame",
    "RestartRequest",
    "SetExpression",
    "SetVariable",
    "SingleThreadExecutionRequests",
    "StepBack",
    "StepInTargetsRequest",
    "SteppingGranularity",
    "TerminateRequest",
    "TerminateThreadsRequest",
    "ValueFormattingOptions",
    "WriteMemoryRequest",
)


def capability_fields() -> list[Field]:
    """Return the fields of Capabilities, shared with the initialize response."""
    return fields(
        ("additionalModuleColumns?", array_of(COLUMN_DESCRIPTOR)),
        ("breakpointModes?", array_of(BREAKPOINT_MODE)),
        ("completionTriggerCharacters?", array_of(to_string)),
        ("exceptionBreakpointFilters?", array_of(EXCEPTION_BREAKPOINTS_FILTER)),
        *((f"{flag}?", to_boolean) for flag in _CAPABILITY_FLAGS),
        ("supportedChecksumAlgorithms?", array_of(to_string)),
        *((f"supports{flag}?", to_boolean) for flag in _SUPPORTS_FLAGS),
    )


CAPABILITIES = StructType("Capabilities", "", capability_fields())

COMPLETION_ITEM = _type(
    "CompletionItem",
    ("detail?", to_string),
    ("label", to_string),
    ("length?", to_integer),
    ("selectionLength?", to_integer),
    ("selectionStart?", to_integer),
    ("sortText?", to_string),
    ("start?", to_integer),
    ("text?", to_string),
    ("type?", to_string),
)

DISASSEMBLED_INSTRUCTION = _type(
    "DisassembledInstruction",
    ("address", to_string),
    _COLUMN,
    *_END_RANGE,
    ("instruction", to_string),
    ("instructionBytes?", to_string),
    ("line?", to_integer),
    ("location?", SOURCE),
    ("presentationHint?", to_string),
    ("symbol?", to_string),
)

MESSAGE = _type(
    "Message",
    ("format", to_string),
    ("id", to_integer),
    ("sendTelemetry?", to_boolean),
    ("showUser?", to_boolean),
    ("url?", to_string),
    ("urlLabel?", to_string),
    ("variables?", to_object),
)

VARIABLE_PRESENTATION_HINT = _type(
    "VariablePresentationHint",
    ("attributes?", array_of(to_string)),
    ("kind?", to_string),
    ("lazy?", to_boolean),
    ("visibility?", to_string),
)

VALUE_FORMAT = _type("ValueFormat", ("hex?", to_boolean))

EXCEPTION_DETAILS = _type(
    "ExceptionDetails",
    ("evaluateName?", to_string),
    ("fullTypeName?", to_string),
    ("innerException?", _exception_details_list),
    ("message?", to_string),
    ("stackTrace?", to_string),
    ("typeName?", to_string),
)

GOTO_TARGET = _type(
    "GotoTarget",
    _COLUMN,
    *_END_RANGE,
    ("id", to_integer),
    ("instructionPointerReference?", to_string),
    ("label", to_string),
    ("line", to_integer),
)

MODULE = _type(
    "Module",
    ("addressRange?", to_string),
    ("dateTimeStamp?", to_string),
    ("id", _integer_or_string),
    ("isOptimized?", to_boolean),
    ("isUserCode?", to_boolean),
    ("name", to_string),
    ("path?", to_string),
    ("symbolFilePath?", to_string),
    ("symbolStatus?", to_string),
    ("version?", to_string),
)

SCOPE = _type(
    "Scope",
    _COLUMN,
    *_END_RANGE,
    ("expensive", to_boolean),
    ("indexedVariables?", to_integer),
    ("line?", to_integer),
    ("name", to_string),
    ("namedVariables?", to_integer),
    ("presentationHint?", to_string),
    ("source?", SOURCE),
    ("variablesReference", to_integer),
)

SOURCE_BREAKPOINT = _type(
    "SourceBreakpoint",
    _COLUMN,
    *_CONDITIONS,
    ("line", to_integer),
    ("logMessage?", to_string),
    ("mode?", to_string),
)

DATA_BREAKPOINT = _type(
    "DataBreakpoint",
    ("accessType?", to_string),
    ("condition?", to_string),
    ("dataId", to_string),
    ("hitCondition?", to_string),
)

EXCEPTION_PATH_SEGMENT = _type(
    "ExceptionPathSegment",
    ("names", array_of(to_string)),
    ("negate?", to_boolean),
)

EXCEPTION_OPTIONS = _type(
    "ExceptionOptions",
    ("breakMode", to_string),
    ("path?", array_of(EXCEPTION_PATH_SEGMENT)),
)

EXCEPTION_FILTER_OPTIONS = _type(
    "ExceptionFilterOptions",
    ("condition?", to_string),
    ("filterId", to_string),
    ("mode?", to_string),
)

FUNCTION_BREAKPOINT = _type("FunctionBreakpoint", *_CONDITIONS, ("name", to_string))

INSTRUCTION_BREAKPOINT = _type(
    "InstructionBreakpoint",
    *_CONDITIONS,
    ("instructionReference", to_string),
    ("mode?", to_string),
    ("offset?", to_integer),
)

STACK_FRAME = _type(
    "StackFrame",
    ("canRestart?", to_boolean),
    ("column", to_integer),
    *_END_RANGE,
    ("id", to_integer),
    ("instructionPointerReference?", to_string),
    ("line", to_integer),
    ("moduleId?", _integer_or_string),
    ("name", to_string),
    ("presentationHint?", to_string),
    ("source?", SOURCE),
)

STACK_FRAME_FORMAT = _type(
    "StackFrameFormat",
    *(
        (f"{flag}?", to_boolean)
        for flag in (
            "includeAll",
            "line",
            "module",
            "parameterNames",
            "parameterTypes",
            "parameterValues",
            "parameters",
        )
    ),
)

STEP_IN_TARGET = _type(
    "StepInTarget",
    _COLUMN,
    *_END_RANGE,
    ("id", to_integer),
    ("label", to_string),
    ("line?", to_integer),
)

THREAD = _type("Thread", ("id", to_integer), ("name", to_string))

VARIABLE = _type(
    "Variable",
    ("evaluateName?", to_string),
    *_VARIABLE_COUNTS[:2],
    ("name", to_string),
    _VARIABLE_COUNTS[2],
    ("presentationHint?", VARIABLE_PRESENTATION_HINT),
    ("type?", to_string),
    ("value", to_string),
    ("variablesReference", to_integer),
)

_TYPES: dict[str, StructType] = {
    t.name: t
    for t in (
        CHECKSUM,
        SOURCE,
        BREAKPOINT,
        BREAKPOINT_LOCATION,
        COLUMN_DESCRIPTOR,
        BREAKPOINT_MODE,
        EXCEPTION_BREAKPOINTS_FILTER,
        CAPABILITIES,
        COMPLETION_ITEM,
        DISASSEMBLED_INSTRUCTION,
        MESSAGE,
        VARIABLE_PRESENTATION_HINT,
        VALUE_FORMAT,
        EXCEPTION_DETAILS,
        GOTO_TARGET,
        MODULE,
        SCOPE,
        SOURCE_BREAKPOINT,
        DATA_BREAKPOINT,
        EXCEPTION_PATH_SEGMENT,
        EXCEPTION_OPTIONS,
        EXCEPTION_FILTER_OPTIONS,
        FUNCTION_BREAKPOINT,
        INSTRUCTION_BREAKPOINT,
        STACK_FRAME,
        STACK_FRAME_FORMAT,
        STEP_IN_TARGET,
        THREAD,
        VARIABLE,
    )
}


def find_type(name: str) -> StructType:
    """Return the shared protocol type called ``name``; raise KeyError if none."""
    try:
        return _TYPES[name]
    except KeyError:
        raise KeyError(f"unknown protocol type '{name}'") from None


def type_names() -> tuple[str, ...]:
    """Return the names of all shared protocol types, in declaration order."""
    return tuple(_TYPES)