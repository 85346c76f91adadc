"""Source errors – failures of the backing flag data source."""

from __future__ import annotations

from typing import Any

from goforit.kernel.errors.base import GoforitError


class SourceError(GoforitError):
    """The flag source failed; previously loaded data (if any) keeps serving."""

    default_code = "source_error"


class SourceMissingError(SourceError):
    """The source's backing file is missing or could not be read."""

    default_code = "source_missing"

    def __init__(self, path: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"flag source missing or unreadable: {path}",
            detail={"path": path},
            **kwargs,
        )
        self.path = path


class SourceParseError(SourceError):
    """A single record of the source could not be parsed; it was skipped."""

    default_code = "source_parse_error"

    def __init__(
        self,
        path: str,
        line: int,
        content: str,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        message = f"error parsing flag source {path} line {line}: {content!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            detail={"path": path, "line": line, "content": content},
            **kwargs,
        )
        self.path = path
        self.line = line
        self.content = content


class SourceUnavailableError(SourceError):
    """No flag data has been loaded from the source yet."""

    default_code = "source_unavailable"

    def __init__(self, path: str, **kwargs: Any) -> None:
        super().__init__(
            f"no flag data loaded yet from {path}",
            detail={"path": path},
            **kwargs,
        )
        self.path = path


__all__ = [
    "SourceError",
    "SourceMissingError",
    "SourceParseError",
    "SourceUnavailableError",
]
