from fastapi import Depends, Request, Response
from loguru import logger

from corsgate.cors.decision import ALLOW_ORIGIN_HEADER, VARY_HEADER, AccessDecision, AllowState, apply_vary
from corsgate.cors.gate import GateResult, check
from corsgate.middleware.cors_policy import DECISION_STATE_KEY


def apply_cors_headers(request: Request, response: Response) -> AccessDecision:
    """Copia la decisión del middleware en la respuesta del handler."""
    decision = getattr(request.state, DECISION_STATE_KEY, None)
    if decision is None:
        decision = AccessDecision(AllowState.none)
    for name, value in decision.headers().items():
        if name == VARY_HEADER:
            response.headers[VARY_HEADER] = apply_vary(response.headers.get(VARY_HEADER), value)
        elif name not in response.headers:
            response.headers[name] = value
    return decision


def cors_gate(
    request: Request,
    response: Response,
    _decision: AccessDecision = Depends(apply_cors_headers),
) -> GateResult:
    origin = request.headers.get("origin")
    result = check(origin, response.headers.get(ALLOW_ORIGIN_HEADER))
    if not result.proceed:
        request_id = getattr(request.state, "request_id", "unknown")
        logger.debug(f"[{request_id}] origen {origin} no autorizado, se omite el trabajo de {request.url.path}")
    return result
