import socket

import psutil
import uvicorn
from loguru import logger

from corsgate.core.config import get_settings


def ipv4_addresses() -> list[str]:
    """IPv4 de todas las interfaces de red, incluida la de loopback."""
    addresses = []
    for snics in psutil.net_if_addrs().values():
        for snic in snics:
            if snic.family == socket.AF_INET and snic.address not in addresses:
                addresses.append(snic.address)
    return addresses


def server_urls(port: int) -> list[str]:
    # 127.0.0.1 no es accesible desde otras máquinas; localhost es su alias
    return [f"http://{ip}:{port}" for ip in ["localhost", *ipv4_addresses()]]


if __name__ == "__main__":
    settings = get_settings()
    hosts = "\n  ".join(server_urls(settings.port))
    logger.info(f"Servidor escuchando en:\n  {hosts}")
    uvicorn.run(
        "corsgate.main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
