import pytest

from schedsim.errors import InvalidInput, SchedulingError
from schedsim.metrics import build_result
from schedsim.models import Algorithm, ExecutedSegment, Process


def _seg(pid, start, end):
    return ExecutedSegment(pid=pid, name=pid, start_time=start, end_time=end)


def test_metrics_from_preempted_timeline():
    procs = [Process("A", "A", 0, 3), Process("B", "B", 1, 2)]
    timeline = [_seg("A", 0, 2), _seg("B", 2, 4), _seg("A", 4, 5)]

    res = build_result(Algorithm.RR, procs, timeline, quantum=2)

    by_pid = {m.pid: m for m in res.process_metrics}
    assert by_pid["A"].completion_time == 5
    assert by_pid["A"].turnaround_time == 5
    assert by_pid["A"].waiting_time == 2
    assert by_pid["A"].response_time == 0
    assert by_pid["B"].start_time == 2
    assert by_pid["B"].waiting_time == 1
    assert by_pid["B"].response_time == 1
    assert res.avg_waiting_time == pytest.approx(1.5)
    assert res.avg_turnaround_time == pytest.approx(4.0)
    assert res.avg_response_time == pytest.approx(0.5)
    assert res.total_time == 5


def test_system_metrics_count_idle_time():
    procs = [Process("A", "A", 5, 3)]
    res = build_result(Algorithm.FCFS, procs, [_seg("A", 5, 8)])

    assert res.system.makespan == 8
    assert res.system.cpu_busy_time == 3
    assert res.system.cpu_utilization == pytest.approx(3 / 8)
    assert res.system.throughput == pytest.approx(1 / 8)


def test_starvation_count():
    procs = [Process("A", "A", 0, 1), Process("B", "B", 0, 1), Process("C", "C", 0, 10), Process("D", "D", 0, 1)]
    timeline = [_seg("A", 0, 1), _seg("B", 1, 2), _seg("C", 2, 12), _seg("D", 12, 13)]
    res = build_result(Algorithm.PRIORITY, procs, timeline)
    # waits 0, 1, 2, 12 -> average 3.75
    assert res.system.starvation_count == 1


def test_empty_process_list_is_rejected():
    with pytest.raises(InvalidInput):
        build_result(Algorithm.FCFS, [], [])


def test_process_missing_from_timeline():
    with pytest.raises(SchedulingError, match="never ran"):
        build_result(Algorithm.FCFS, [Process("A", "A", 0, 1), Process("B", "B", 0, 1)], [_seg("A", 0, 1)])


def test_short_execution_is_detected():
    with pytest.raises(SchedulingError, match="expected 4"):
        build_result(Algorithm.FCFS, [Process("A", "A", 0, 4)], [_seg("A", 0, 3)])
