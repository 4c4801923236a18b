from __future__ import annotations


class TaskFlowError(Exception):
    """Base class for errors raised by the TaskFlow data layer."""


class EntityNotFound(TaskFlowError):
    """Raised when an update/delete targets an id that does not exist."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} '{entity_id}' not found")
        self.kind = kind
        self.entity_id = entity_id


class IntegrityViolation(TaskFlowError):
    """Raised when a record would break a cross-entity rule (e.g. phase of another project)."""
