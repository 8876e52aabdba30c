"""Identity-provider callbacks."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from fooder.api.deps import AppSettings, Codec, Users
from fooder.core.errors import UnauthorizedError, ValidationError, describe_validation_errors
from fooder.core.responses import success
from fooder.core.security import verify_signature
from fooder.schemas.user import PostConfirmation, ProvisionedUser
from fooder.services.provisioning import provision_user

router = APIRouter(prefix="/hooks", tags=["hooks"])

SIGNATURE_HEADER = "X-Fooder-Signature"


@router.post("/post-confirmation")
async def post_confirmation(
    request: Request,
    users: Users,
    codec: Codec,
    settings: AppSettings,
) -> JSONResponse:
    """Provision the user once the identity provider confirms a sign-up.

    The body must be signed with the shared provisioning secret
    (hex HMAC-SHA256 in ``X-Fooder-Signature``). Repeated calls for the
    same subject update the existing record.
    """
    raw = await request.body()
    if not verify_signature(raw, request.headers.get(SIGNATURE_HEADER, ""), settings.provisioning_secret):
        raise UnauthorizedError("Invalid callback signature")

    try:
        event = PostConfirmation.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors())) from exc

    user = await provision_user(
        event,
        users,
        codec,
        tenant_id=settings.tenant_id,
        admin_fingerprints=settings.admin_fingerprints,
    )
    return success(ProvisionedUser(user_id=user.user_id, role=user.role))
