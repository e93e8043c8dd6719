"""Resolution of computed policies, sync and async."""
import asyncio
import re
import threading
import time

from corsgate.core.errors import PolicyResolutionFailure
from corsgate.cors.policy import AnyOrigin, Computed, Disabled, Fixed, Literal, OriginSet, Pattern, Reflect
from corsgate.cors.resolver import resolve


def _resolve(policy, origin="http://localhost:3000", timeout=None):
    return asyncio.run(resolve(policy, origin, timeout=timeout))


def test_non_computed_policies_pass_through():
    for policy in (AnyOrigin(), Disabled(), Fixed("http://a"), Reflect(), OriginSet((Literal("http://a"),))):
        resolution = _resolve(policy)
        assert resolution.ok
        assert resolution.policy is policy


def test_capability_receives_the_origin():
    seen = []

    def capability(origin):
        seen.append(origin)
        return True

    _resolve(Computed(capability), origin="http://seen.test")
    assert seen == ["http://seen.test"]


def test_capability_results_are_normalized():
    pattern = re.compile(r"^http://localhost:")
    cases = [
        (True, Reflect()),
        (False, Disabled()),
        (None, Disabled()),
        ("", Disabled()),
        ("*", AnyOrigin()),
        ("http://fixed.test", Fixed("http://fixed.test")),
        (pattern, OriginSet((Pattern(pattern),))),
        (["http://a"], OriginSet((Literal("http://a"),))),
    ]
    for raw, expected in cases:
        resolution = _resolve(Computed(lambda origin, raw=raw: raw))
        assert resolution.ok
        assert resolution.policy == expected


def test_async_capability():
    async def capability(origin):
        await asyncio.sleep(0)
        return origin.endswith(".trusted.test")

    assert _resolve(Computed(capability), origin="http://app.trusted.test").policy == Reflect()
    assert _resolve(Computed(capability), origin="http://evil.test").policy == Disabled()


def test_failing_capability_yields_failed_resolution():
    def capability(origin):
        raise RuntimeError("decision source down")

    resolution = _resolve(Computed(capability))
    assert not resolution.ok
    assert resolution.policy is None
    assert isinstance(resolution.error, PolicyResolutionFailure)
    assert "decision source down" in str(resolution.error)
    assert resolution.error.origin == "http://localhost:3000"


def test_slow_capability_times_out():
    async def capability(origin):
        await asyncio.sleep(1)
        return True

    resolution = _resolve(Computed(capability), timeout=0.01)
    assert not resolution.ok
    assert "timeout" in resolution.error.reason


def test_unsupported_capability_result_fails():
    resolution = _resolve(Computed(lambda origin: 42))
    assert not resolution.ok


def test_nested_computed_resolves():
    inner = Computed(lambda origin: "http://inner.test")
    resolution = _resolve(Computed(lambda origin: inner))
    assert resolution.policy == Fixed("http://inner.test")


def test_endlessly_nested_computed_fails():
    def capability(origin):
        return Computed(capability)

    resolution = _resolve(Computed(capability))
    assert not resolution.ok
    assert "anidadas" in resolution.error.reason


def test_capability_returning_bytes_pattern_fails():
    resolution = _resolve(Computed(lambda origin: re.compile(rb"^http://localhost")))
    assert not resolution.ok
    assert "bytes" in resolution.error.reason


def test_sync_capability_runs_off_the_event_loop_thread():
    threads = []

    def capability(origin):
        threads.append(threading.get_ident())
        return True

    assert _resolve(Computed(capability)).policy == Reflect()
    assert threads and threads[0] != threading.get_ident()


def test_blocking_sync_capability_times_out():
    release = threading.Event()

    def capability(origin):
        release.wait(2)
        return True

    try:
        started = time.perf_counter()
        resolution = _resolve(Computed(capability), timeout=0.05)
        elapsed = time.perf_counter() - started
    finally:
        release.set()
    assert not resolution.ok
    assert "timeout" in resolution.error.reason
    assert elapsed < 1
