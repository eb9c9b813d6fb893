"""Change notifications for the task snapshot store and its dependency edges."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.tasks_changed: Signal[str] = Signal()         # task_id
        self.dependencies_changed: Signal[str] = Signal()  # dependent task_id


# SINGLE global instance
domain_events = DomainEvents()
