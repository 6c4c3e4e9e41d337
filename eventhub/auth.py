import logging
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.orm import Session

from eventhub import models
from eventhub.config import settings
from eventhub.database import get_db
from eventhub.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

_serializer = URLSafeTimedSerializer(settings.SECRET_KEY, salt="eventhub-session")


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash in storage
        return False


def create_access_token(user_id: str) -> str:
    return _serializer.dumps({"id": user_id})


def decode_access_token(token: str) -> str:
    """Return the user id carried by a token, or raise AuthenticationError."""
    try:
        payload = _serializer.loads(token, max_age=settings.TOKEN_MAX_AGE)
    except SignatureExpired:
        logger.debug("Rejected expired session token")
        raise AuthenticationError()
    except BadSignature:
        logger.debug("Rejected session token with bad signature")
        raise AuthenticationError()
    user_id = payload.get("id") if isinstance(payload, dict) else None
    if not user_id:
        raise AuthenticationError()
    return user_id


def extract_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(settings.COOKIE_NAME)


def get_current_user_id(request: Request, db: Session = Depends(get_db)) -> str:
    token = extract_token(request)
    if not token:
        raise AuthenticationError("Not authorized, no token")
    user_id = decode_access_token(token)
    if db.get(models.User, user_id) is None:
        logger.debug("Session token refers to missing user %s", user_id)
        raise AuthenticationError()
    return user_id
