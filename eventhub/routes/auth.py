from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from eventhub import auth
from eventhub.config import settings
from eventhub.database import get_db
from eventhub.responses import dump, success_response
from eventhub.schemas import LoginRequest, RegisterRequest, UserOut
from eventhub.services import user_service

router = APIRouter()


def _set_session_cookie(response: JSONResponse, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.TOKEN_MAX_AGE,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/register")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user = user_service.register(db, data)
    token = auth.create_access_token(user.id)
    response = success_response(data=dump(UserOut.model_validate(user)), token=token,
                                status_code=status.HTTP_201_CREATED)
    _set_session_cookie(response, token)
    return response


@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user, token = user_service.login(db, data)
    response = success_response(data=dump(UserOut.model_validate(user)), token=token)
    _set_session_cookie(response, token)
    return response


@router.post("/logout")
def logout():
    response = success_response(message="Logged out successfully")
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/me")
def me(user_id: str = Depends(auth.get_current_user_id), db: Session = Depends(get_db)):
    user = user_service.get_me(db, user_id)
    return success_response(data=dump(UserOut.model_validate(user)))
