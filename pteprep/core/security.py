from fastapi import HTTPException, Request

from pteprep.core.settings import settings


async def verify_api_key(request: Request):
    """
    Admin endpoints: the x-api-key header must match API_KEY.
    """
    api_key = request.headers.get("x-api-key")
    if not api_key or api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")


def require_user_id(request: Request) -> str:
    """The caller identifies itself with the x-user-id header."""
    user_id = (request.headers.get("x-user-id") or "").strip()
    if not user_id:
        raise HTTPException(status_code=400, detail="x-user-id header is required")
    return user_id
