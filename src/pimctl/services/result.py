"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Policy exceptions are converted here, never printed or exited on.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pimctl.errors import PimError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is one of the stable codes on :mod:`pimctl.errors` classes;
    ``detail`` carries context and, for policy denials, a remediation ``hint``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PimError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=exc.to_detail())


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"config_show"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: PimError, **data: Any) -> ServiceResult:
        return cls(ok=False, op=op, data=data, error=ServiceError.from_exception(exc))
