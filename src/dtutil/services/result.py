"""ServiceResult and ServiceError: the contract between services and the CLI.

INVARIANT: service methods never raise for bad input. A
:class:`~dtutil.domain.errors.DateTimeUtilError` becomes a failed
ServiceResult whose error code is the exception's ``code``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from dtutil.domain.errors import DateTimeUtilError


class ServiceError(BaseModel):
    """Why an operation failed.

    Attributes:
        code: One of ``INVALID_ARGUMENT``, ``INVALID_PATTERN``, ``PARSE_ERROR``.
        message: Human-readable description naming the offending input.
        detail: Structured context (argument name, pattern, field, ...).
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DateTimeUtilError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Return type of every ConvertService operation."""

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any],
        *,
        warnings: list[str] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [], meta=meta)

    @classmethod
    def failure(cls, op: str, exc: DateTimeUtilError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
