"""Middleware ASGI que aplica la política de orígenes a cada petición HTTP.

La decisión se calcula antes de que corra el handler, se guarda en
``scope["state"]["cors_decision"]`` y sus cabeceras se inyectan en la respuesta.
No atiende preflight OPTIONS.
"""
from corsgate.core.logging_config import cors_logger
from corsgate.cors.decision import (
    ALLOW_ORIGIN_HEADER,
    VARY_HEADER,
    AccessDecision,
    AllowState,
    apply_vary,
    build,
    denied,
)
from corsgate.cors.policy import Policy
from corsgate.cors.resolver import resolve

DECISION_STATE_KEY = "cors_decision"

_ALLOW_ORIGIN_KEY = ALLOW_ORIGIN_HEADER.lower().encode()
_VARY_KEY = VARY_HEADER.lower().encode()


async def decide(policy: Policy, origin: str | None, timeout: float | None = None) -> AccessDecision:
    resolution = await resolve(policy, origin, timeout=timeout)
    if not resolution.ok:
        cors_logger(origin, AllowState.denied).warning(f"Fallo al resolver la política: {resolution.error}")
        return denied()
    try:
        return build(origin, resolution.policy)
    except Exception:
        cors_logger(origin, AllowState.denied).exception("No se pudo evaluar la política")
        return denied()


def _merge_headers(raw: list[tuple[bytes, bytes]], extra: dict[str, str]) -> list[tuple[bytes, bytes]]:
    headers = list(raw)
    has_acao = any(k.lower() == _ALLOW_ORIGIN_KEY for k, _ in headers)
    if ALLOW_ORIGIN_HEADER in extra and not has_acao:
        headers.append((_ALLOW_ORIGIN_KEY, extra[ALLOW_ORIGIN_HEADER].encode("latin-1")))

    if VARY_HEADER in extra:
        existing = [v.decode("latin-1") for k, v in headers if k.lower() == _VARY_KEY]
        merged = apply_vary(", ".join(existing) or None, extra[VARY_HEADER])
        headers = [(k, v) for k, v in headers if k.lower() != _VARY_KEY]
        headers.append((_VARY_KEY, merged.encode("latin-1")))
    return headers


def wrap_with_cors_policy(app, policy: Policy, *, resolve_timeout: float | None = None, log_origins: bool = False):
    """Envuelve una app ASGI para escribir Access-Control-Allow-Origin y Vary según ``policy``."""

    async def asgi_wrapper(scope, receive, send):
        if scope["type"] != "http":
            return await app(scope, receive, send)

        origin = next((v.decode("latin-1") for k, v in scope.get("headers", []) if k == b"origin"), None) or None
        decision = await decide(policy, origin, timeout=resolve_timeout)
        if log_origins:
            cors_logger(origin, decision.state).info(f"origin: {origin}")
        scope.setdefault("state", {})[DECISION_STATE_KEY] = decision
        extra = decision.headers()

        async def send_wrapper(message):
            if message["type"] == "http.response.start" and extra:
                message = {**message, "headers": _merge_headers(message.get("headers", []), extra)}
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_wrapper
