"""Observability – get_logger helper and the error-rendering processor."""
from __future__ import annotations

from typing import Any

import structlog


class ErrorDetailProcessor:
    """structlog processor that expands an ``error=`` exception into fields.

    When an event carries a :class:`~goforit.kernel.errors.GoforitError` under
    the ``error`` key, its ``code`` and ``detail`` are copied alongside the
    message so that log pipelines can filter on them::

        structlog.configure(processors=[ErrorDetailProcessor(), ...])
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        error = event_dict.get("error")
        if isinstance(error, BaseException):
            to_dict = getattr(error, "to_dict", None)
            if callable(to_dict):
                payload = to_dict()
                event_dict.setdefault("error_code", payload.get("code"))
                if payload.get("detail"):
                    event_dict.setdefault("error_detail", payload["detail"])
            event_dict["error"] = str(error)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["ErrorDetailProcessor", "get_logger"]
