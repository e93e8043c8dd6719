from __future__ import annotations

from corsgate.cors.policy import (
    AnyOrigin,
    Computed,
    Disabled,
    Fixed,
    Literal,
    Matcher,
    OriginSet,
    Pattern,
    Policy,
    Reflect,
)


def _matcher_hits(matcher: Matcher, origin: str) -> bool:
    if isinstance(matcher, Literal):
        return origin == matcher.value
    if isinstance(matcher, Pattern):
        return matcher.regex.search(origin) is not None
    raise TypeError(f"Matcher no soportado: {matcher!r}")


def matches(origin: str | None, policy: Policy) -> bool:
    """Decide si ``origin`` está permitido por ``policy``. Sin efectos secundarios."""
    if isinstance(policy, AnyOrigin):
        return True
    if isinstance(policy, Disabled):
        return False
    if isinstance(policy, Fixed):
        return origin is not None and origin == policy.value
    if isinstance(policy, Reflect):
        return origin is not None
    if isinstance(policy, OriginSet):
        if origin is None:
            return False
        return any(_matcher_hits(m, origin) for m in policy.matchers)
    if isinstance(policy, Computed):
        raise TypeError("Una política Computed debe resolverse antes de comparar orígenes")
    raise TypeError(f"Política no soportada: {policy!r}")
