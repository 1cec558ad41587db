"""
FastAPI routers grouped by entity (posts, categories, comments).

Each module exposes an APIRouter that app.py mounts under the API prefix.
Routers translate HTTP input into service calls; the rules live in services.
"""

from __future__ import annotations

from fastapi import Request

from blog_api.dependencies import Services


def get_services(request: Request) -> Services:
    svc = getattr(getattr(request.app, "state", None), "services", None)
    if not svc:
        raise RuntimeError("Services not configured")
    return svc
