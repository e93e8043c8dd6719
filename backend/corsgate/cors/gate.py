from __future__ import annotations

from dataclasses import dataclass

from corsgate.cors.policy import WILDCARD


@dataclass(frozen=True)
class GateResult:
    proceed: bool


def check(request_origin: str | None, allow_origin_value: str | None) -> GateResult:
    """Compara el allow-origin ya emitido con el origen de la petición actual.

    Sin origen y sin cabecera (petición directa) también se continúa.
    """
    request_origin = request_origin or None
    allow_origin_value = allow_origin_value or None
    return GateResult(proceed=allow_origin_value == request_origin or allow_origin_value == WILDCARD)
