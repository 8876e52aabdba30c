"""Security utilities: PII fingerprinting/sealing, identity tokens, callback signatures."""

import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from jose import jwt

from fooder.core.config import Settings, get_settings
from fooder.core.errors import PIICodecError

logger = logging.getLogger(__name__)


# ── Fingerprints (SHA-256, deterministic for lookups) ─────────

def normalize_email(value: str) -> str:
    return value.lower().strip()


def fingerprint(value: str) -> str:
    """One-way SHA-256 digest of the normalized value, as 64 hex chars.

    Deterministic so it can be matched against the admin allow-list and
    used to de-duplicate users without storing the address in clear.
    """
    return hashlib.sha256(normalize_email(value).encode()).hexdigest()


# ── Field-level encryption (Fernet) ──────────────────────────

class PIICodec:
    """Seals and unseals PII fields with one or more Fernet keys.

    The first key encrypts; every key is tried on decrypt so old
    ciphertexts stay readable after a rotation.
    """

    fingerprint = staticmethod(fingerprint)

    def __init__(self, keys: list[str]) -> None:
        self._keys = [k for k in keys if k]
        self._fernet: MultiFernet | None = None

    def _get_fernet(self) -> MultiFernet:
        if self._fernet is None:
            if not self._keys:
                raise PIICodecError("ENCRYPTION_KEYS is not configured")
            try:
                self._fernet = MultiFernet([Fernet(k.encode()) for k in self._keys])
            except ValueError as exc:
                raise PIICodecError("ENCRYPTION_KEYS contains an invalid Fernet key") from exc
        return self._fernet

    def seal(self, plaintext: str) -> str:
        """Encrypt a string value. Returns base64 ciphertext."""
        return self._get_fernet().encrypt(plaintext.encode()).decode()

    def unseal(self, token: str) -> str:
        """Decrypt a sealed value. Raises PIICodecError on any failure."""
        try:
            return self._get_fernet().decrypt(token.encode()).decode()
        except InvalidToken as exc:
            logger.error("Failed to unseal PII field: ciphertext rejected")
            raise PIICodecError("PII ciphertext could not be decrypted") from exc


@lru_cache
def get_pii_codec() -> PIICodec:
    """Process-wide codec built once from settings."""
    settings = get_settings()
    return PIICodec([k.strip() for k in settings.encryption_keys.split(",")])


# ── Identity tokens (JWT) ─────────────────────────────────────

def create_jwt(
    subject: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
    **claims: str,
) -> str:
    """Issue a token shaped like the identity provider's. Used by local tooling and tests."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    payload: dict = {"sub": subject, "exp": expire, **claims}
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_jwt(token: str, settings: Settings) -> dict:
    """Decode and verify a JWT. Raises jose.JWTError on failure."""
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )


# ── Identity-provider callback signatures ─────────────────────

def sign_payload(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(body: bytes, signature: str, secret: str) -> bool:
    if not secret or not signature:
        return False
    return hmac.compare_digest(sign_payload(body, secret), signature)
