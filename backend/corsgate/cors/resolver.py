"""Resolución de políticas ``Computed`` para el origen de una petición."""
from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any

from anyio import to_thread

from corsgate.core.errors import PolicyResolutionFailure
from corsgate.cors.policy import Capability, Computed, Disabled, Policy, ResolvedPolicy, normalize

MAX_COMPUTED_DEPTH = 4


@dataclass(frozen=True)
class Resolution:
    policy: ResolvedPolicy | None = None
    error: PolicyResolutionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.policy is not None


async def _bounded(awaitable, timeout: float | None) -> Any:
    if timeout:
        return await asyncio.wait_for(awaitable, timeout)
    return await awaitable


async def _invoke(capability: Capability, origin: str | None, timeout: float | None) -> Any:
    # Las capabilities síncronas corren en el threadpool para no bloquear el event loop.
    # Al vencer el timeout se abandona el hilo; no se interrumpe.
    if inspect.iscoroutinefunction(capability):
        result = capability(origin)
    else:
        result = await _bounded(to_thread.run_sync(capability, origin, abandon_on_cancel=True), timeout)
    if inspect.isawaitable(result):
        return await _bounded(result, timeout)
    return result


async def resolve(policy: Policy, origin: str | None, timeout: float | None = None) -> Resolution:
    """Resuelve ``policy`` a una variante sin ``Computed``.

    Un fallo de la capability (excepción, timeout o valor no normalizable) no
    se propaga: se devuelve una ``Resolution`` con ``error``.
    """
    current = policy
    for _ in range(MAX_COMPUTED_DEPTH):
        if not isinstance(current, Computed):
            return Resolution(policy=current)
        try:
            raw = await _invoke(current.capability, origin, timeout)
            current = normalize(raw, if_absent=Disabled())
        except TimeoutError:
            return Resolution(error=PolicyResolutionFailure(origin, f"timeout tras {timeout}s"))
        except Exception as e:
            return Resolution(error=PolicyResolutionFailure(origin, f"{type(e).__name__}: {e}"))
    if isinstance(current, Computed):
        return Resolution(error=PolicyResolutionFailure(origin, "demasiadas políticas Computed anidadas"))
    return Resolution(policy=current)
