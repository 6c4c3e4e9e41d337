import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventhub import auth
from eventhub.exceptions import AuthenticationError, ConflictError, NotFoundError
from eventhub.models import User
from eventhub.schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


def get_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email.lower()).first()


def register(db: Session, data: RegisterRequest) -> User:
    if get_by_email(db, data.email) is not None:
        raise ConflictError("User already exists")

    user = User(name=data.name, email=data.email, password=auth.get_password_hash(data.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def login(db: Session, data: LoginRequest) -> Tuple[User, str]:
    """Verify credentials and issue a session token.

    Unknown email and wrong password fail with the same message.
    """
    user = get_by_email(db, data.email)
    if user is None or not auth.verify_password(data.password, user.password):
        raise AuthenticationError("Invalid email or password")
    logger.info("User %s logged in", user.id)
    return user, auth.create_access_token(user.id)


def get_me(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
