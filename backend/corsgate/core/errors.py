from __future__ import annotations


def default_code_for_status(status_code: int) -> str:
    mapping = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        422: "validation_error",
        500: "internal_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


class CorsPolicyError(Exception):
    """Base para errores de la política de orígenes."""


class MalformedPatternPolicy(CorsPolicyError, ValueError):
    """Un patrón de origen no compila. Se detecta al construir la política."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Patrón de origen inválido {pattern!r}: {reason}")


class PolicyResolutionFailure(CorsPolicyError):
    """La política calculada no pudo resolverse para un origen concreto."""

    def __init__(self, origin: str | None, reason: str):
        self.origin = origin
        self.reason = reason
        super().__init__(f"No se pudo resolver la política para {origin!r}: {reason}")
