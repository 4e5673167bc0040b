import pytest

from schedsim import InvalidInput, InvalidParameter, SchedulingError, simulate
from schedsim.models import Algorithm, Process
from schedsim.validation import MAX_PROCESSES, validate_processes, validate_quantum


def _proc(pid="P1", arrival_time=0, burst_time=3, priority=1, name=None):
    return Process(pid, name=pid if name is None else name, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def test_empty_workload_rejected():
    with pytest.raises(InvalidInput):
        simulate("fcfs", [])


def test_too_many_processes_rejected():
    procs = [_proc(f"P{i}") for i in range(MAX_PROCESSES + 1)]
    with pytest.raises(InvalidInput, match="Too many"):
        validate_processes(procs)
    assert len(validate_processes(procs[:MAX_PROCESSES])) == MAX_PROCESSES


def test_duplicate_pid_rejected():
    with pytest.raises(InvalidInput) as excinfo:
        validate_processes([_proc("P1"), _proc("P1", arrival_time=2)])
    assert excinfo.value.field == "pid"
    assert excinfo.value.pid == "P1"


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"arrival_time": -1}, "arrival_time"),
        ({"arrival_time": 1001}, "arrival_time"),
        ({"burst_time": 0}, "burst_time"),
        ({"burst_time": -4}, "burst_time"),
        ({"burst_time": True}, "burst_time"),
        ({"burst_time": 2.5}, "burst_time"),
        ({"priority": 0}, "priority"),
        ({"priority": 101}, "priority"),
        ({"name": "   "}, "name"),
        ({"name": "x" * 51}, "name"),
    ],
)
def test_field_constraints(overrides, field):
    with pytest.raises(InvalidInput) as excinfo:
        simulate("sjf", [_proc("ok", 0, 2), _proc("bad", **overrides)])
    assert excinfo.value.field == field
    assert excinfo.value.pid == "bad"


def test_boundary_values_accepted():
    res = simulate("priority", [_proc("P1", arrival_time=0, burst_time=1, priority=100, name="x" * 50)])
    assert res.total_time == 1


def test_validate_returns_fresh_list():
    procs = (_proc("P1"), _proc("P2"))
    out = validate_processes(procs)
    assert out == list(procs)
    assert out is not procs


@pytest.mark.parametrize("quantum", [0, -2, True, 1.5])
def test_bad_quantum_rejected(quantum):
    with pytest.raises(InvalidParameter) as excinfo:
        simulate("rr", [_proc()], quantum=quantum)
    assert excinfo.value.field == "quantum"


def test_missing_quantum_uses_default():
    assert validate_quantum(None, default=2) == 2
    assert validate_quantum(5, default=2) == 5


def test_unknown_algorithm_rejected():
    with pytest.raises(InvalidParameter) as excinfo:
        simulate("lottery", [_proc()])
    assert excinfo.value.field == "algorithm"


def test_algorithm_names_are_case_insensitive():
    assert Algorithm.parse("RR") is Algorithm.RR
    assert Algorithm.parse("Round-Robin") is Algorithm.RR
    assert Algorithm.parse(" Priority ") is Algorithm.PRIORITY
    assert Algorithm.parse(Algorithm.SJF) is Algorithm.SJF


def test_errors_are_value_errors():
    assert issubclass(InvalidInput, SchedulingError)
    assert issubclass(InvalidParameter, SchedulingError)
    assert issubclass(SchedulingError, ValueError)
