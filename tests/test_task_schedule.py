from core.services.scheduling import (
    BackwardPassPolicy,
    CriticalPathAnalyzer,
    calculate_task_schedule,
)
from tests.factories import FIXED_NOW, day, make_dep, make_task


def _fixture():
    tasks = [make_task("A", 0, 3), make_task("B", 0, 2), make_task("C", 3, 6), make_task("N")]
    deps = [make_dep("A", "C"), make_dep("B", "C")]
    return tasks, deps


def test_schedule_for_non_critical_task_shifts_latest_dates_by_slack():
    tasks, deps = _fixture()
    analyzer = CriticalPathAnalyzer(BackwardPassPolicy.MINIMUM, clock=lambda: FIXED_NOW)

    schedule = analyzer.calculate_task_schedule("B", tasks, deps)

    assert schedule is not None
    assert schedule.earliest_start == day(0)
    assert schedule.earliest_finish == day(2)
    assert schedule.latest_start == day(1)
    assert schedule.latest_finish == day(3)
    assert schedule.total_slack == 1
    assert schedule.free_slack == schedule.total_slack
    assert schedule.is_critical is False


def test_schedule_for_critical_task_keeps_its_dates():
    tasks, deps = _fixture()
    schedule = calculate_task_schedule("C", tasks, deps, backward_pass_policy=BackwardPassPolicy.MINIMUM)

    assert schedule.is_critical is True
    assert schedule.total_slack == 0
    assert schedule.latest_start == schedule.earliest_start == day(3)
    assert schedule.latest_finish == schedule.earliest_finish == day(6)


def test_schedule_is_none_for_unknown_or_undated_tasks():
    tasks, deps = _fixture()
    assert calculate_task_schedule("N", tasks, deps) is None
    assert calculate_task_schedule("missing", tasks, deps) is None


def test_schedule_is_none_when_graph_has_cycle():
    tasks = [make_task("A", 0, 1), make_task("B", 1, 2)]
    deps = [make_dep("A", "B"), make_dep("B", "A")]
    assert calculate_task_schedule("A", tasks, deps) is None
