import copy
from dataclasses import dataclass, field

import pytest

from zeebeclient.command import InvalidVariablesError
from zeebeclient.create_instance import (
    LATEST_VERSION,
    CreateInstanceCommand,
    CreateProcessInstanceRequest,
    CreateProcessInstanceWithResultRequest,
    ProcessInstanceCreationStartInstruction,
)


@dataclass
class Vars:
    foo: str = field(default="", metadata={"json": "foo", "omitempty": True})

    def __str__(self) -> str:
        return f'{{"foo":"{self.foo}"}}'


class RecordingGateway:
    """Records every call by method name; fails the first ``failures`` calls."""

    def __init__(self, failures=0):
        self.calls = []
        self.stub = object()
        self.failures = failures

    def __getattr__(self, name):
        def rpc(request, timeout=None):
            self.calls.append((name, copy.deepcopy(request), timeout))
            if self.failures:
                self.failures -= 1
                raise ConnectionError("unavailable")
            return self.stub

        return rpc


def run(build, with_result, failures=0, predicate=None):
    """Build a command on a fresh gateway, send it and return the gateway."""
    gateway = RecordingGateway(failures)
    command = build(CreateInstanceCommand(gateway, predicate))
    if with_result:
        assert command.with_result().send(timeout=10) is gateway.stub
    else:
        assert command.send() is gateway.stub
    return gateway


def expected_call(inner, with_result):
    if with_result:
        return (
            "create_process_instance_with_result",
            CreateProcessInstanceWithResultRequest(request=inner, request_timeout=10000),
            10,
        )
    return ("create_process_instance", inner, None)


BUILDS = [
    (lambda c: c.process_definition_key(123), CreateProcessInstanceRequest(process_definition_key=123)),
    (
        lambda c: c.bpmn_process_id("foo").latest_version(),
        CreateProcessInstanceRequest(bpmn_process_id="foo", version=-1),
    ),
    (
        lambda c: c.bpmn_process_id("foo").version(56),
        CreateProcessInstanceRequest(bpmn_process_id="foo", version=56),
    ),
    (
        lambda c: c.bpmn_process_id("foo")
        .version(56)
        .start_before_element("my-start-element")
        .start_before_element("my-other-start-element"),
        CreateProcessInstanceRequest(
            bpmn_process_id="foo",
            version=56,
            start_instructions=[
                ProcessInstanceCreationStartInstruction("my-start-element"),
                ProcessInstanceCreationStartInstruction("my-other-start-element"),
            ],
        ),
    ),
    (
        lambda c: c.process_definition_key(123).tenant_id("1234"),
        CreateProcessInstanceRequest(process_definition_key=123, tenant_id="1234"),
    ),
]


@pytest.mark.parametrize("with_result", [False, True])
@pytest.mark.parametrize("build, inner", BUILDS)
def test_request_fields(with_result, build, inner):
    gateway = run(build, with_result)
    assert gateway.calls == [expected_call(inner, with_result)]


def test_latest_version_is_minus_one():
    assert LATEST_VERSION == -1
    gateway = run(lambda c: c.bpmn_process_id("foo").latest_version(), False)
    assert gateway.calls[0][1].version == LATEST_VERSION


@pytest.mark.parametrize("with_result", [False, True])
@pytest.mark.parametrize(
    "setter, value, expected",
    [
        ("variables_from_string", '{"foo":"bar"}', '{"foo":"bar"}'),
        ("variables_from_stringer", Vars(foo="bar"), '{"foo":"bar"}'),
        ("variables_from_object", Vars(foo="bar"), '{"foo":"bar"}'),
        ("variables_from_object", Vars(foo=""), "{}"),
        ("variables_from_object_ignore_omitempty", Vars(foo=""), '{"foo":""}'),
        ("variables_from_map", {"foo": "bar"}, '{"foo":"bar"}'),
    ],
)
def test_variables(with_result, setter, value, expected):
    gateway = run(lambda c: getattr(c.process_definition_key(123), setter)(value), with_result)
    inner = CreateProcessInstanceRequest(process_definition_key=123, variables=expected)
    assert gateway.calls == [expected_call(inner, with_result)]


@pytest.mark.parametrize("names, expected", [(("a", "b", "c"), ["a", "b", "c"]), ((), [])])
def test_with_result_fetch_variables(names, expected):
    gateway = RecordingGateway()
    CreateInstanceCommand(gateway, None).process_definition_key(123).with_result().fetch_variables(
        *names
    ).send(timeout=10)
    assert gateway.calls[0][1] == CreateProcessInstanceWithResultRequest(
        request=CreateProcessInstanceRequest(process_definition_key=123),
        request_timeout=10000,
        fetch_variables=expected,
    )


def test_with_result_without_timeout_has_zero_request_timeout():
    gateway = RecordingGateway()
    CreateInstanceCommand(gateway, None).process_definition_key(1).with_result().send()
    assert gateway.calls[0][1].request_timeout == 0


def test_invalid_variables_string_raises():
    command = CreateInstanceCommand(RecordingGateway(), None).process_definition_key(1)
    with pytest.raises(InvalidVariablesError):
        command.variables_from_string("{not json")


def test_retries_until_success():
    gateway = run(
        lambda c: c.process_definition_key(5),
        False,
        failures=2,
        predicate=lambda exc: isinstance(exc, ConnectionError),
    )
    assert len(gateway.calls) == 3


def test_error_propagates_without_retry():
    gateway = RecordingGateway(failures=1)
    with pytest.raises(ConnectionError):
        CreateInstanceCommand(gateway, lambda exc: False).process_definition_key(5).send()
    assert len(gateway.calls) == 1