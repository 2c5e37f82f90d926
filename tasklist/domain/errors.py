from __future__ import annotations


class TaskListError(Exception):
    """Base class for errors raised by the task list model."""


class ValidationError(TaskListError, ValueError):
    """Input rejected before any state change."""


class StorageError(TaskListError):
    """The key-value storage could not be read or written."""
