"""Admin API endpoints protected by bearer tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Header, Request

from inner_garden.api.models import AdminLoginRequest  # noqa: TC001
from inner_garden.domain.errors import ValidationError
from inner_garden.domain.sessions import AdminSession  # noqa: TC001
from inner_garden.domain.timestamps import format_timestamp

if TYPE_CHECKING:
    from inner_garden.containers import AppContainer

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def extract_token(authorization: str | None, x_admin_token: str | None) -> str | None:
    """Return the bearer token from either supported header."""
    if authorization:
        scheme, _, credentials = authorization.strip().partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if x_admin_token and x_admin_token.strip():
        return x_admin_token.strip()
    return None


async def require_admin(
    request: Request,
    authorization: str | None = Header(default=None),
    x_admin_token: str | None = Header(default=None),
) -> AdminSession:
    """Ensure requests carry a valid session or static admin token."""
    token = extract_token(authorization, x_admin_token)
    return _container(request).admin_session_service.authorize(token)


@router.post("/login")
async def login(body: AdminLoginRequest, request: Request) -> dict[str, object]:
    """Exchange admin credentials for a session token."""
    session = _container(request).admin_session_service.login(
        body.email, body.password
    )
    return {
        "success": True,
        "token": session.token,
        "expiresAt": format_timestamp(session.expires_at),
    }


@router.get("/artworks", dependencies=[Depends(require_admin)])
async def list_artworks(request: Request) -> dict[str, object]:
    """Return every artwork with per-status counts."""
    service = _container(request).artwork_service
    collection = service.list_artworks()
    return {
        "success": True,
        "artworks": [artwork.to_dict() for artwork in collection.artworks],
        "updated_at": collection.updated_at,
        "summary": service.summarize(collection),
    }


@router.post("/artworks", dependencies=[Depends(require_admin)])
async def create_artwork(
    request: Request, payload: Any = Body(default=None)  # noqa: B008
) -> dict[str, object]:
    """Create an artwork from the submitted fields."""
    artwork = _container(request).artwork_service.create(_require_object(payload))
    return {"success": True, "artwork": artwork.to_dict()}


@router.put("/artworks/{artwork_id}", dependencies=[Depends(require_admin)])
async def update_artwork(
    artwork_id: str, request: Request, payload: Any = Body(default=None)  # noqa: B008
) -> dict[str, object]:
    """Merge the submitted fields over an existing artwork."""
    artwork = _container(request).artwork_service.update(
        artwork_id, _require_object(payload)
    )
    return {"success": True, "artwork": artwork.to_dict()}


@router.delete("/artworks/{artwork_id}", dependencies=[Depends(require_admin)])
async def delete_artwork(artwork_id: str, request: Request) -> dict[str, object]:
    """Delete an artwork."""
    _container(request).artwork_service.delete(artwork_id)
    return {"success": True}


def _require_object(payload: object) -> dict[str, object]:
    if not isinstance(payload, dict):
        raise ValidationError("Artwork payload must be a JSON object")
    return payload
