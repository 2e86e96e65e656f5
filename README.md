# zeebeclient

Fluent command builders for a Zeebe workflow engine gateway. The package can
build and send requests that:

- create process instances, and optionally wait for their result;
- evaluate decisions;
- publish messages;
- fail jobs and throw business errors from jobs;
- set variables on an element instance;
- query the cluster topology.

It also provides a `Job` type that decodes a job's variables and custom headers.

## The gateway and retries

The package opens no network connections itself. Every command takes a
*gateway* and an optional *retry predicate*:

```python
command = SomeCommand(gateway, should_retry)
```

The gateway is any object with the matching methods, such as a wrapper around
a gRPC stub or a test double. Each method is called as
`method(request, timeout=timeout)`. The request is a plain dataclass, and the
method's return value is passed back unchanged by `send()`. `topology` is the
exception: it is called with `timeout=` only. The methods used are:

| Command | Gateway method |
|---|---|
| `CreateInstanceCommand` | `create_process_instance` |
| `CreateInstanceWithResultCommand` | `create_process_instance_with_result` |
| `EvaluateDecisionCommand` | `evaluate_decision` |
| `PublishMessageCommand` | `publish_message` |
| `FailJobCommand` | `fail_job` |
| `ThrowErrorCommand` | `throw_error` |
| `SetVariablesCommand` | `set_variables` |
| `TopologyCommand` | `topology` |

The retry predicate is called with the exception the gateway raised. If it
returns true, the call is made again. Otherwise the exception propagates. When
no predicate is given, nothing is retried.

`send(timeout=None)` takes a timeout in seconds and passes it on to the gateway.

## Creating a process instance

```python
from zeebeclient.create_instance import CreateInstanceCommand

never_retry = lambda error: False

response = (
    CreateInstanceCommand(gateway, never_retry)
    .bpmn_process_id("order-process")
    .latest_version()
    .variables_from_map({"orderId": "A-1"})
    .send(timeout=10)
)
```

Other ways to choose what to start:

- `process_definition_key(key)` selects the definition by its key.
- `version(n)` picks a specific version. `latest_version()` sets the version to
  `LATEST_VERSION` (-1).
- `tenant_id(...)` sets the tenant.
- `start_before_element(element_id)` may be called several times. Each call adds
  a start instruction.

Call `with_result()` to get a `CreateInstanceWithResultCommand`, which waits
for the instance to complete. `fetch_variables(*names)` limits the variables
returned. On `send(timeout)`, the request's `request_timeout` is set to the
timeout in milliseconds, or 0 when no timeout is given.

```python
result = (
    CreateInstanceCommand(gateway, never_retry)
    .process_definition_key(123)
    .with_result()
    .fetch_variables("a", "b")
    .send(timeout=30)
)
```

## Other commands

```python
from datetime import timedelta

from zeebeclient.command import SetVariablesCommand, TopologyCommand
from zeebeclient.evaluate_decision import EvaluateDecisionCommand
from zeebeclient.fail_job import FailJobCommand
from zeebeclient.publish_message import PublishMessageCommand
from zeebeclient.throw_error import ThrowErrorCommand

EvaluateDecisionCommand(gateway).decision_id("approve").tenant_id("t1").send()

PublishMessageCommand(gateway).message_name("paid").correlation_key("A-1") \
    .time_to_live(timedelta(minutes=6)).send()

FailJobCommand(gateway).job_key(42).retries(2) \
    .retry_backoff(timedelta(seconds=10)).error_message("boom").send()

ThrowErrorCommand(gateway).job_key(42).error_code("NOT_FOUND").send()

SetVariablesCommand(gateway).element_instance_key(7) \
    .variables_from_map({"x": 1}).local(True).send()

TopologyCommand(gateway).send()
```

`time_to_live` and `retry_backoff` accept either a `timedelta` or a number of
seconds. Either way, the request stores the value in milliseconds.

## Variables

Every command that carries variables offers the same setters. Each returns the
command, so calls can be chained.

- `variables_from_string(text)`: the text must be valid JSON. It is stored as is.
- `variables_from_stringer(obj)`: uses `str(obj)`, which must be valid JSON.
- `variables_from_object(obj)`: serialises a dataclass, mapping, list or plain
  value to compact JSON.
- `variables_from_object_ignore_omitempty(obj)`: the same, but keeps empty fields
  that would otherwise be dropped.
- `variables_from_map(mapping)`: the same as `variables_from_object`.

When dataclasses are serialised, field metadata controls the output:

- `{"json": "name"}` renames a field, and `{"json": "-"}` leaves it out.
- `{"omitempty": True}` drops the field when its value is empty: `None`, `False`,
  `0`, an empty string or an empty container.

Mapping keys are written in sorted order.

```python
from dataclasses import dataclass, field

@dataclass
class Data:
    foo: str = field(default="", metadata={"json": "foo", "omitempty": True})
```

With these metadata settings, `Data(foo="")` gives `{}` from
`variables_from_object`. It gives `{"foo":""}` from
`variables_from_object_ignore_omitempty`.

Invalid or unserialisable input raises `zeebeclient.command.InvalidVariablesError`,
a subclass of `ValueError`. The helpers behind these setters are public in
`zeebeclient.command`:

- `validate_json(name, value)`
- `to_json(name, value, ignore_omitempty)`
- `long_polling_millis(timeout)`

## Jobs

`zeebeclient.job.Job` wraps an `ActivatedJob`. The fields of the activated job
can be read directly on the job, for example `job.key` or `job.retries`.

```python
from zeebeclient.job import ActivatedJob, Job

job = Job(ActivatedJob(variables='{"foo": "bar"}', custom_headers='{"hello": "world"}'))
job.variables_as_dict()       # {"foo": "bar"}
job.custom_headers_as_dict()  # {"hello": "world"}
job.variables_as(MyData)      # decode into a dataclass
```

When decoding into a dataclass, `variables_as` and `custom_headers_as` match
JSON keys to field names. An exact match is tried first, then a match that
ignores case. Keys that match no field are ignored.

`custom_headers_as_dict` raises `ValueError` if a header value is not a string.

## What the package does not do

There is no transport. You supply the gateway object yourself.

The package has no commands for the following:

- deploying or deleting resources;
- updating job retries or job timeouts;
- resolving incidents;
- activating or streaming jobs.

There is no command-line program.

## Installation

```
pip install zeebeclient
```

To run the tests:

```
pip install "zeebeclient[test]"
pytest
```