from datetime import date

import pytest

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.models import ConflictType, DependencyType


def _chain(ts):
    a = ts.create_task("Design", start_date=date(2024, 1, 1), due_date=date(2024, 1, 4))
    b = ts.create_task("Prototype", start_date=date(2024, 1, 1), due_date=date(2024, 1, 3))
    c = ts.create_task("Build", start_date=date(2024, 1, 4), due_date=date(2024, 1, 7))
    return a, b, c


def test_create_task_trims_title_and_persists_dates(services):
    ts = services["task_service"]

    task = ts.create_task("  Plan  ", start_date=date(2024, 2, 1), due_date=date(2024, 2, 3))

    stored = ts.get_task(task.id)
    assert stored.title == "Plan"
    assert stored.start_date == date(2024, 2, 1)
    assert stored.due_date == date(2024, 2, 3)
    assert stored.completed is False


def test_create_task_rejects_empty_title_and_inverted_dates(services):
    ts = services["task_service"]

    with pytest.raises(ValidationError) as empty:
        ts.create_task("   ")
    assert empty.value.code == "TASK_TITLE_EMPTY"

    with pytest.raises(ValidationError) as inverted:
        ts.create_task("Backwards", start_date=date(2024, 1, 5), due_date=date(2024, 1, 2))
    assert inverted.value.code == "TASK_INVALID_DATE"
    assert ts.list_tasks() == []


def test_update_task_only_accepts_snapshot_fields(services):
    ts = services["task_service"]
    task = ts.create_task("Write docs")

    updated = ts.update_task(task.id, due_date=date(2024, 3, 1), title="Write user docs")
    assert updated.title == "Write user docs"
    assert ts.get_task(task.id).due_date == date(2024, 3, 1)

    with pytest.raises(ValidationError) as exc:
        ts.update_task(task.id, priority=3)
    assert exc.value.code == "TASK_UNKNOWN_FIELD"

    assert ts.set_completed(task.id).completed is True
    assert ts.get_task(task.id).completed is True

    with pytest.raises(NotFoundError):
        ts.update_task("missing", title="x")


def test_add_dependency_persists_edge(services):
    ts = services["task_service"]
    a, _b, c = _chain(ts)

    dep = ts.add_dependency(c.id, a.id, dependency_type=DependencyType.START_TO_START, lag_days=2, created_by="ana")

    stored = ts.list_dependencies()
    assert [d.id for d in stored] == [dep.id]
    assert stored[0].dependency_type == DependencyType.START_TO_START
    assert stored[0].lag_days == 2
    assert stored[0].created_by == "ana"
    assert stored[0].created_at is not None
    assert ts.get_blocking_tasks(c.id) == [a.id]
    assert ts.get_blocked_tasks(a.id) == [c.id]
    assert [d.id for d in ts.list_dependencies_for_task(a.id)] == [dep.id]


def test_add_dependency_rejects_invalid_edges(services):
    ts = services["task_service"]
    a, b, c = _chain(ts)
    ts.add_dependency(b.id, a.id)
    ts.add_dependency(c.id, b.id)

    with pytest.raises(ValidationError) as self_edge:
        ts.add_dependency(a.id, a.id)
    assert self_edge.value.code == "DEPENDENCY_SELF"

    with pytest.raises(ValidationError) as duplicate:
        ts.add_dependency(b.id, a.id)
    assert duplicate.value.code == "DEPENDENCY_DUPLICATE"

    with pytest.raises(NotFoundError) as missing:
        ts.add_dependency(a.id, "missing")
    assert missing.value.code == "TASK_NOT_FOUND"

    with pytest.raises(BusinessRuleError) as cycle:
        ts.add_dependency(a.id, c.id)
    assert cycle.value.code == "DEPENDENCY_CYCLE"
    assert "Cycle path: Build -> Design -> Prototype -> Build" in str(cycle.value)

    with pytest.raises(ValidationError) as lag:
        ts.add_dependency(c.id, a.id, lag_days=1.5)
    assert lag.value.code == "DEPENDENCY_INVALID_LAG"

    assert len(ts.list_dependencies()) == 2


def test_remove_dependency(services):
    ts = services["task_service"]
    a, b, _c = _chain(ts)
    dep = ts.add_dependency(b.id, a.id)

    ts.remove_dependency(dep.id)

    assert ts.list_dependencies() == []
    with pytest.raises(NotFoundError) as exc:
        ts.remove_dependency(dep.id)
    assert exc.value.code == "DEPENDENCY_NOT_FOUND"


def test_replace_dependency_creates_new_edge(services):
    ts = services["task_service"]
    a, b, _c = _chain(ts)
    old = ts.add_dependency(b.id, a.id, lag_days=1)

    new = ts.replace_dependency(old.id, dependency_type=DependencyType.FINISH_TO_FINISH)

    assert new.id != old.id
    assert new.dependency_type == DependencyType.FINISH_TO_FINISH
    assert new.lag_days == 1
    stored = ts.list_dependencies()
    assert [d.id for d in stored] == [new.id]
    assert (stored[0].dependent_task_id, stored[0].depends_on_task_id) == (b.id, a.id)

    with pytest.raises(NotFoundError):
        ts.replace_dependency(old.id, lag_days=0)


def test_delete_task_removes_its_edges(services):
    ts = services["task_service"]
    a, b, c = _chain(ts)
    ts.add_dependency(b.id, a.id)
    ts.add_dependency(c.id, b.id)
    ts.add_dependency(c.id, a.id)

    ts.delete_task(b.id)

    assert ts.get_task(b.id) is None
    remaining = ts.list_dependencies()
    assert [(d.dependent_task_id, d.depends_on_task_id) for d in remaining] == [(c.id, a.id)]

    with pytest.raises(NotFoundError):
        ts.delete_task(b.id)


def test_diagnostics_report_slack_impact(services):
    ts = services["task_service"]
    a, b, c = _chain(ts)
    ts.add_dependency(c.id, a.id)

    diagnostic = ts.get_dependency_diagnostics(c.id, b.id)

    assert diagnostic.is_valid is True
    assert diagnostic.code == "DEPENDENCY_VALID"
    assert [row.task_id for row in diagnostic.impact_rows] == [b.id]
    row = diagnostic.impact_rows[0]
    assert (row.before_slack, row.after_slack) == (0, 1)
    assert row.before_critical is True
    assert row.after_critical is False
    assert row.trace_path == "Prototype"
    # nothing was written
    assert len(ts.list_dependencies()) == 1


def test_diagnostics_for_unchanged_critical_path(services):
    ts = services["task_service"]
    a, _b, c = _chain(ts)

    diagnostic = ts.get_dependency_diagnostics(c.id, a.id)

    assert diagnostic.is_valid is True
    assert diagnostic.impact_rows == []
    assert "does not change" in diagnostic.summary


def test_available_prerequisites_exclude_downstream_tasks(services):
    ts = services["task_service"]
    a, b, c = _chain(ts)
    ts.add_dependency(b.id, a.id)
    ts.add_dependency(c.id, b.id)

    assert {t.id for t in ts.get_available_prerequisites(b.id)} == {a.id}
    assert {t.id for t in ts.get_available_prerequisites(a.id)} == set()
    assert {t.id for t in ts.get_available_prerequisites(c.id)} == {a.id, b.id}


def test_service_analysis_and_conflicts_use_current_snapshot(services):
    ts = services["task_service"]
    a, b, c = _chain(ts)
    ts.add_dependency(c.id, a.id)
    ts.add_dependency(c.id, b.id)

    analysis = ts.get_critical_path()
    assert analysis.critical_tasks == [a.id, c.id]
    assert analysis.total_duration == 6
    assert ts.get_task_schedule(b.id).total_slack == 1

    # every task is due before the fixed clock and still open
    conflicts = ts.get_conflicts()
    assert {c_.type for c_ in conflicts} == {ConflictType.OVERDUE_BLOCKER}
    assert len(ts.get_conflicts_for_task(b.id)) == 1

    ts.set_completed(a.id)
    ts.set_completed(b.id)
    assert ts.get_conflicts() == []


def test_mutations_emit_domain_events(services):
    ts = services["task_service"]
    task_events: list[str] = []
    dep_events: list[str] = []
    domain_events.tasks_changed.connect(task_events.append)
    domain_events.dependencies_changed.connect(dep_events.append)
    try:
        a = ts.create_task("A", start_date=date(2024, 1, 1), due_date=date(2024, 1, 2))
        b = ts.create_task("B", start_date=date(2024, 1, 2), due_date=date(2024, 1, 3))
        dep = ts.add_dependency(b.id, a.id)
        ts.remove_dependency(dep.id)
        ts.delete_task(a.id)
    finally:
        domain_events.tasks_changed.disconnect(task_events.append)
        domain_events.dependencies_changed.disconnect(dep_events.append)

    assert task_events == [a.id, b.id, a.id]
    assert dep_events == [b.id, b.id, a.id]


def test_failed_validation_emits_nothing(services):
    ts = services["task_service"]
    seen: list[str] = []
    domain_events.tasks_changed.connect(seen.append)
    try:
        with pytest.raises(ValidationError):
            ts.create_task("")
    finally:
        domain_events.tasks_changed.disconnect(seen.append)
    assert seen == []
