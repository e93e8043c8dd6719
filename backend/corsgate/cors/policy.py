"""Políticas de origen: qué orígenes pueden leer respuestas cross-origin.

Una política se construye una sola vez al configurar el servidor y se comparte
en modo solo lectura entre todas las peticiones.
"""
from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Union

from loguru import logger

from corsgate.core.errors import MalformedPatternPolicy

WILDCARD = "*"


@dataclass(frozen=True)
class AnyOrigin:
    pass


@dataclass(frozen=True)
class Disabled:
    pass


@dataclass(frozen=True)
class Fixed:
    value: str


@dataclass(frozen=True)
class Reflect:
    pass


@dataclass(frozen=True)
class Literal:
    value: str


@dataclass(frozen=True)
class Pattern:
    """Patrón de origen. La sensibilidad a mayúsculas la decide el propio patrón."""

    regex: re.Pattern[str]

    def __post_init__(self):
        if isinstance(self.regex, str):
            object.__setattr__(self, "regex", compile_pattern(self.regex))
        elif not isinstance(self.regex, re.Pattern):
            raise TypeError(f"Pattern espera str o re.Pattern, no {type(self.regex).__name__}")
        elif not isinstance(self.regex.pattern, str):
            # Los orígenes son str; un patrón bytes fallaría en cada petición
            raise MalformedPatternPolicy(repr(self.regex.pattern), "los patrones de origen deben ser str, no bytes")


Matcher = Union[Literal, Pattern]


@dataclass(frozen=True)
class OriginSet:
    matchers: tuple[Matcher, ...]

    def __post_init__(self):
        # Literales primero: más baratos que las expresiones regulares
        matchers = tuple(self.matchers)
        ordered = tuple(m for m in matchers if isinstance(m, Literal)) + tuple(
            m for m in matchers if isinstance(m, Pattern)
        )
        if len(ordered) != len(matchers):
            raise TypeError("OriginSet solo admite Literal y Pattern")
        object.__setattr__(self, "matchers", ordered)


Capability = Callable[[str | None], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class Computed:
    capability: Capability


ResolvedPolicy = Union[AnyOrigin, Disabled, Fixed, Reflect, OriginSet]
Policy = Union[ResolvedPolicy, Computed]

_POLICY_TYPES = (AnyOrigin, Disabled, Fixed, Reflect, OriginSet, Computed)


def compile_pattern(source: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise MalformedPatternPolicy(source, str(e)) from e


def _to_matcher(item: Any) -> Matcher:
    if isinstance(item, (Literal, Pattern)):
        return item
    if isinstance(item, str):
        return Literal(item)
    if isinstance(item, re.Pattern):
        return Pattern(item)
    raise TypeError(f"Valor de origen no soportado en la lista: {item!r}")


def normalize(raw: Any, *, if_absent: ResolvedPolicy | None = None) -> Policy:
    """Convierte un valor de configuración en una política.

    ``True`` refleja el origen, ``False`` o vacío deshabilita, ``"*"`` permite
    cualquiera, otra cadena es un valor fijo, un patrón o una secuencia forman
    un ``OriginSet`` y un callable se difiere como ``Computed``. ``None`` se
    traduce en ``if_absent`` (``AnyOrigin`` por defecto).
    """
    if isinstance(raw, _POLICY_TYPES):
        return raw
    if raw is None:
        return if_absent if if_absent is not None else AnyOrigin()
    if raw is True:
        return Reflect()
    if raw is False:
        return Disabled()
    if isinstance(raw, str):
        if not raw:
            return Disabled()
        if raw == WILDCARD:
            return AnyOrigin()
        return Fixed(raw)
    if isinstance(raw, (re.Pattern, Literal, Pattern)):
        return OriginSet((_to_matcher(raw),))
    if isinstance(raw, (list, tuple, set, frozenset)):
        if not raw:
            return Disabled()
        return OriginSet(tuple(_to_matcher(item) for item in raw))
    if callable(raw):
        return Computed(raw)
    raise TypeError(f"Política de origen no soportada: {raw!r}")


def policy_from_settings(settings) -> Policy:
    """Construye la política del servidor a partir de CORS_MODE y variables asociadas."""
    mode = settings.cors_mode.strip().lower()
    if mode == "any":
        return AnyOrigin()
    if mode == "disabled":
        return Disabled()
    if mode == "reflect":
        return Reflect()
    if mode == "fixed":
        if not settings.cors_fixed_origin.strip():
            raise ValueError("CORS_MODE=fixed requiere CORS_FIXED_ORIGIN")
        return Fixed(settings.cors_fixed_origin.strip())
    if mode == "list":
        literals, patterns = settings.get_cors_origins()
        matchers: list[Matcher] = [Literal(o) for o in literals]
        matchers.extend(Pattern(compile_pattern(p)) for p in patterns)
        if not matchers:
            logger.warning("CORS_MODE=list sin ALLOWED_ORIGINS ni ALLOWED_ORIGIN_PATTERNS: CORS deshabilitado")
            return Disabled()
        return OriginSet(tuple(matchers))
    raise ValueError(f"CORS_MODE desconocido: {settings.cors_mode!r}")
