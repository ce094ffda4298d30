from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookflix.db import get_db
from bookflix.errors import ApiError
from bookflix.logs import get_logger
from bookflix.services import auth as auth_service

router = APIRouter(tags=["auth"])

LOG = get_logger("bookflix.auth")

BAD_CREDENTIALS = "Incorrect username/password! Try again."


class SignupIn(BaseModel):
    username: str | None = None
    pw: str | None = None


class LoginIn(BaseModel):
    username: str | None = None
    password: str | None = None


@router.post("/signup", status_code=201)
def signup(body: SignupIn, db: Session = Depends(get_db)):
    username = (body.username or "").strip()
    if not username or not body.pw:
        raise ApiError(400, error="Username and password are required")
    try:
        auth_service.create_user(db, username, body.pw)
    except IntegrityError:
        db.rollback()
        LOG.info("signup rejected for existing username %r", username)
        raise ApiError(500, error="User already exists or database error!")
    return {"message": "User created successfully"}


@router.post("/login")
def login(body: LoginIn, db: Session = Depends(get_db)):
    username = (body.username or "").strip()
    if not username or not body.password:
        raise ApiError(401, message=BAD_CREDENTIALS)
    if not auth_service.verify_login(db, username, body.password):
        raise ApiError(401, message=BAD_CREDENTIALS)
    return {"message": "Login successful"}
