"""Engine – flag evaluation and asynchronous notification delivery."""
from goforit.engine.dispatcher import DEFAULT_QUEUE_SIZE, NotificationDispatcher
from goforit.engine.events import AgeEvent, AgeType, CheckEvent, ErrorEvent, Notification
from goforit.engine.flagset import (
    AgeCallback,
    CheckCallback,
    ErrorCallback,
    Flagset,
    log_errors_to,
)

__all__ = [
    "DEFAULT_QUEUE_SIZE",
    "AgeCallback",
    "AgeEvent",
    "AgeType",
    "CheckCallback",
    "CheckEvent",
    "ErrorCallback",
    "ErrorEvent",
    "Flagset",
    "Notification",
    "NotificationDispatcher",
    "log_errors_to",
]
