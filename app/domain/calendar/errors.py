"""Domain error codes for the calendar module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    WRITE_IN_PROGRESS = "WRITE_IN_PROGRESS"
    NO_PENDING_ARCHIVE = "NO_PENDING_ARCHIVE"
    NO_SELECTED_EVENT = "NO_SELECTED_EVENT"
    INVALID_EDIT = "INVALID_EDIT"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when no derived event has the requested id."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Calendar event not found")
        self.event_id = event_id


class OrderNotFoundError(DomainError):
    """Raised when an event's source order is no longer in the order list."""

    def __init__(self, order_id: str) -> None:
        super().__init__(code=ErrorCode.ORDER_NOT_FOUND, message="Order not found")
        self.order_id = order_id


class WriteInProgressError(DomainError):
    """Raised when a save or archive is submitted while another is outstanding."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.WRITE_IN_PROGRESS,
            message="A save is already in progress. Please wait for it to finish.",
        )


class NoPendingArchiveError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.NO_PENDING_ARCHIVE, message="No event awaiting archive")


class NoSelectedEventError(DomainError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.NO_SELECTED_EVENT, message="No event is open")


class InvalidEditError(DomainError):
    """Raised when an edit buffer cannot be turned into an order change."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EDIT, message=message)


class OrderPersistenceError(DomainError):
    """Raised when the order store rejects a write."""

    def __init__(self, action: str) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=f"Failed to {action}. Please try again.",
        )
