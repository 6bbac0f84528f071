"""Every route except /health is called by the provisioning host with the shared key."""

import hmac
import logging

from fastapi import Header, HTTPException, status

from .config import INTERNAL_API_KEY

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Internal-Api-Key"


def verify_internal_key(api_key: str = Header(..., alias=API_KEY_HEADER)) -> None:
    if not hmac.compare_digest(api_key.encode(), INTERNAL_API_KEY.encode()):
        logger.warning("Rejected request with invalid %s header", API_KEY_HEADER)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid internal API key",
        )
