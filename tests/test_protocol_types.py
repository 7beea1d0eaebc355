import pytest

from dapwire.protocol_types import find_type, type_names
from dapwire.serialization import DeserializeError, dumps


def test_find_type_returns_named_type():
    source = find_type("Source")
    assert source.name == "Source"
    assert source.wire_name == ""


def test_find_type_unknown_raises():
    with pytest.raises(KeyError):
        find_type("NoSuchType")


def test_type_names_all_resolvable_and_unique():
    names = type_names()
    assert len(names) == len(set(names))
    for name in names:
        assert find_type(name).name == name
    assert {"Checksum", "Source", "Breakpoint", "Capabilities", "Thread", "Variable"} <= set(names)


def test_thread_round_trip_through_json():
    thread = find_type("Thread")
    value = thread.create(id=100, name="TheThread")
    text = dumps(value)
    assert thread.deserialize(text) == value
    assert thread.serialize(value) == {"id": 100, "name": "TheThread"}


def test_optional_fields_left_out():
    source = find_type("Source")
    value = source.create(name="HelloDebuggerSource", sourceReference=400)
    assert source.serialize(value) == {"name": "HelloDebuggerSource", "sourceReference": 400}


def test_missing_required_field_raises():
    thread = find_type("Thread")
    with pytest.raises(DeserializeError):
        thread.deserialize({"name": "TheThread"})


def test_wrong_field_kind_raises():
    frame = find_type("StackFrame")
    with pytest.raises(DeserializeError):
        frame.deserialize({"column": 1, "id": 200, "line": "one", "name": "HelloDebugger"})


def test_stack_frame_nested_source_round_trip():
    frame_type = find_type("StackFrame")
    source_type = find_type("Source")
    frame = frame_type.create(
        column=1,
        id=200,
        line=3,
        name="HelloDebugger",
        source=source_type.create(name="HelloDebuggerSource", sourceReference=400),
    )
    decoded = frame_type.deserialize(dumps(frame))
    assert decoded == frame
    assert decoded.source.sourceReference == 400


def test_recursive_sources_round_trip():
    source_type = find_type("Source")
    inner = source_type.create(path="inner.c")
    outer = source_type.create(path="outer.c", sources=[inner])
    decoded = source_type.deserialize(dumps(outer))
    assert decoded == outer
    assert decoded.sources[0].path == "inner.c"


def test_exception_breakpoints_filter_default_key():
    filter_type = find_type("ExceptionBreakpointsFilter")
    value = filter_type.create(filter="uncaught", label="Uncaught", default=True)
    encoded = filter_type.serialize(value)
    assert encoded["default"] is True
    assert filter_type.deserialize(encoded) == value


def test_module_id_accepts_integer_or_string():
    module_type = find_type("Module")
    by_int = module_type.deserialize({"id": 7, "name": "libfoo"})
    by_str = module_type.deserialize({"id": "seven", "name": "libfoo"})
    assert by_int.id == 7
    assert by_str.id == "seven"
    with pytest.raises(DeserializeError):
        module_type.deserialize({"id": True, "name": "libfoo"})


def test_capabilities_default_encodes_empty():
    caps = find_type("Capabilities")
    assert caps.serialize(caps.create()) == {}


def test_capabilities_round_trip_with_nested_arrays():
    caps = find_type("Capabilities")
    column = find_type("ColumnDescriptor").create(attributeName="addr", label="Address")
    value = caps.create(
        supportsConfigurationDoneRequest=True,
        additionalModuleColumns=[column],
        supportedChecksumAlgorithms=["MD5", "SHA256"],
    )
    assert caps.deserialize(dumps(value)) == value


def test_breakpoint_verified_default_and_required():
    bp = find_type("Breakpoint")
    created = bp.create()
    assert created.verified is False
    with pytest.raises(DeserializeError):
        bp.deserialize({"line": 3})


def test_message_variables_object():
    message = find_type("Message")
    value = message.deserialize({"format": "x is {x}", "id": 1, "variables": {"x": "5"}})
    assert value.variables == {"x": "5"}
    assert message.deserialize(dumps(value)) == value


def test_variable_presentation_hint_nested():
    variable = find_type("Variable")
    hint = find_type("VariablePresentationHint").create(attributes=["readOnly"], lazy=True)
    value = variable.create(name="currentLine", value="1", variablesReference=0, presentationHint=hint)
    decoded = variable.deserialize(dumps(value))
    assert decoded.presentationHint.attributes == ["readOnly"]
    assert decoded == value


def test_exception_details_inner_round_trip():
    details = find_type("ExceptionDetails")
    inner = details.create(message="inner")
    outer = details.create(message="outer", innerException=[inner])
    assert details.deserialize(dumps(outer)) == outer


def test_deserialize_rejects_non_object():
    with pytest.raises(DeserializeError):
        find_type("Checksum").deserialize([1, 2])