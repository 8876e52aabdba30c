"""Current user profile."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from fooder.api.deps import Codec, CurrentIdentity, Users
from fooder.core.responses import success
from fooder.services.identity import load_profile

router = APIRouter(tags=["auth"])


@router.get("/me")
async def get_me(identity: CurrentIdentity, users: Users, codec: Codec) -> JSONResponse:
    """Return the caller's profile with email and display name decrypted."""
    profile = await load_profile(identity, users, codec)
    return success(profile)
