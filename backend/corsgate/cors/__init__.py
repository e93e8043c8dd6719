from corsgate.cors.decision import AccessDecision, AllowState, build, denied
from corsgate.cors.gate import GateResult, check
from corsgate.cors.matcher import matches
from corsgate.cors.policy import (
    AnyOrigin,
    Computed,
    Disabled,
    Fixed,
    Literal,
    OriginSet,
    Pattern,
    Reflect,
    normalize,
    policy_from_settings,
)
from corsgate.cors.resolver import Resolution, resolve

__all__ = [
    "AccessDecision",
    "AllowState",
    "AnyOrigin",
    "Computed",
    "Disabled",
    "Fixed",
    "GateResult",
    "Literal",
    "OriginSet",
    "Pattern",
    "Reflect",
    "Resolution",
    "build",
    "check",
    "denied",
    "matches",
    "normalize",
    "policy_from_settings",
    "resolve",
]
