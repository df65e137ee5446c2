"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from coursely.auth.service import AuthService


async def get_auth_service(request: Request) -> AuthService:
    """Get auth service from app state."""
    service = getattr(request.app.state, "auth_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not available",
        )
    return service


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
