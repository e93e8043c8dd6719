"""Rutas de diagnóstico de conexión: desde dónde llega la petición y con qué cabeceras."""
import json
from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from corsgate.core.config import get_settings

router = APIRouter(tags=["connection"])


@router.get("/", response_class=HTMLResponse)
def connected(request: Request):
    settings = get_settings()
    now = datetime.now().astimezone().strftime("%a %b %d %Y %H:%M:%S GMT%z (%Z)")
    return f"""<pre>
Connected to {request.url.scheme}://{request.url.hostname}:{settings.port}
{now}
</pre>"""


@router.get("/headers", response_class=HTMLResponse)
def request_headers(request: Request):
    return f"""<pre>
{json.dumps(dict(request.headers), indent=2)}
</pre>"""
