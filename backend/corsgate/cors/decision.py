"""Cabeceras de respuesta derivadas de una política resuelta."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from corsgate.cors.matcher import matches
from corsgate.cors.policy import WILDCARD, AnyOrigin, Disabled, Fixed, OriginSet, Reflect, ResolvedPolicy

ALLOW_ORIGIN_HEADER = "Access-Control-Allow-Origin"
VARY_HEADER = "Vary"


class AllowState(StrEnum):
    wildcard = "wildcard"
    origin = "origin"
    denied = "denied"
    none = "none"  # la política no decide nada sobre CORS


@dataclass(frozen=True)
class AccessDecision:
    state: AllowState
    value: str | None = None
    varies: bool = False

    @property
    def allow_origin_value(self) -> str | None:
        if self.state in (AllowState.wildcard, AllowState.origin):
            return self.value
        return None

    def headers(self) -> dict[str, str]:
        """Cabeceras a escribir. Una denegación nunca produce valor de allow-origin."""
        headers: dict[str, str] = {}
        if self.allow_origin_value is not None:
            headers[ALLOW_ORIGIN_HEADER] = self.allow_origin_value
        if self.varies:
            headers[VARY_HEADER] = "Origin"
        return headers


def denied() -> AccessDecision:
    return AccessDecision(AllowState.denied, varies=True)


def build(origin: str | None, resolved: ResolvedPolicy) -> AccessDecision:
    if isinstance(resolved, AnyOrigin):
        return AccessDecision(AllowState.wildcard, WILDCARD, varies=False)
    if isinstance(resolved, Disabled):
        return AccessDecision(AllowState.none)
    if isinstance(resolved, Fixed):
        # El valor fijo se emite aunque no coincida con el origen de la petición
        if origin is None:
            return AccessDecision(AllowState.none, varies=True)
        return AccessDecision(AllowState.origin, resolved.value, varies=True)
    if isinstance(resolved, (Reflect, OriginSet)):
        if matches(origin, resolved):
            return AccessDecision(AllowState.origin, origin, varies=True)
        return denied()
    raise TypeError(f"Política no resuelta: {resolved!r}")


def apply_vary(existing: str | None, token: str = "Origin") -> str:
    if not existing:
        return token
    parts = [p.strip() for p in existing.split(",") if p.strip()]
    if "*" in parts or any(p.lower() == token.lower() for p in parts):
        return ", ".join(parts)
    return ", ".join([*parts, token])
