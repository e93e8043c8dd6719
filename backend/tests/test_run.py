import socket
from types import SimpleNamespace

import run


def _snic(family, address):
    return SimpleNamespace(family=family, address=address, netmask=None, broadcast=None, ptp=None)


def test_server_urls_lists_every_interface(monkeypatch):
    monkeypatch.setattr(run.psutil, "net_if_addrs", lambda: {
        "lo": [_snic(socket.AF_INET, "127.0.0.1"), _snic(socket.AF_INET6, "::1")],
        "eth0": [_snic(socket.AF_INET, "192.168.0.11"), _snic(socket.AF_INET6, "fe80::1")],
        "wlan0": [_snic(socket.AF_INET, "10.0.0.5")],
    })
    assert run.server_urls(3000) == [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://192.168.0.11:3000",
        "http://10.0.0.5:3000",
    ]


def test_server_urls_skips_duplicate_addresses(monkeypatch):
    monkeypatch.setattr(run.psutil, "net_if_addrs", lambda: {
        "eth0": [_snic(socket.AF_INET, "192.168.0.11")],
        "br0": [_snic(socket.AF_INET, "192.168.0.11")],
    })
    assert run.server_urls(8080) == ["http://localhost:8080", "http://192.168.0.11:8080"]
