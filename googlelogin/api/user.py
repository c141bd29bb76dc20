"""Google profile of the signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from googlelogin.auth import require_access_token
from googlelogin.auth.models import GoogleUser
from googlelogin.auth.session import drop_token
from googlelogin.services.google import (
    GoogleProfileService,
    ProfileFetchError,
    TokenExpiredError,
    get_profile_service,
)

router = APIRouter()


@router.get("/profile")
async def get_profile(
    request: Request,
    access_token: Annotated[str, Depends(require_access_token)],
    profile_service: Annotated[GoogleProfileService, Depends(get_profile_service)],
) -> GoogleUser:
    """Profile fetched from Google with the session's access token."""
    try:
        return await profile_service.get_profile(access_token)
    except TokenExpiredError:
        drop_token(request)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Google token expired, log in again",
        )
    except ProfileFetchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
