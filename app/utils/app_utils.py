import logging
from uuid import uuid4
from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel
from typing import Dict, Any, Optional
import bcrypt
from jose import JWTError, jwt
from pymongo.errors import PyMongoError
from db import employees_collection
from exceptions import get_user_exception
from models.employees import Employee
from schemas.employee import Identity
from config import settings

from datetime import datetime, timezone, timedelta

UTC = timezone.utc

logger = logging.getLogger(__name__)

oauth2_bearer = OAuth2PasswordBearer(tokenUrl="auth/login")

secret_key = settings.SECRET_KEY
algorithm = settings.ALGORITHM


class Token(BaseModel):
    access_token: str
    token_type: str
    session_id: str


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed_password.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if isinstance(hashed_password, str):
        hashed_password = hashed_password.encode('utf-8')

    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password)


def create_access_token(payload: Dict[str, Any], expiry: timedelta):
    data_to_encode = {"data": payload}
    expiry_delta = datetime.now(UTC) + expiry
    data_to_encode.update({"exp": expiry_delta})
    encoded_data: str = jwt.encode(data_to_encode, secret_key, algorithm)

    return encoded_data


def new_session_token(username: str) -> Token:
    session_id = str(uuid4())
    token = create_access_token(
        payload={"sub": username, "sid": session_id},
        expiry=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(access_token=token, token_type="bearer", session_id=session_id)


def to_identity(document: dict, session_id: Optional[str] = None) -> Identity:
    employee = Employee(**document)
    return Identity(
        username=employee.username,
        team=employee.team,
        approver_name=employee.approver_name,
        country=employee.country,
        session_id=session_id,
    )


async def authenticate_user(username: str, password: str):
    """
    authenticates an employee
    args:-
        - username: directory username
        - password: plain password
    """
    employee = await employees_collection.find_one({"username": username})
    if not employee:
        return False

    if employee.get("employment_status", "active") != "active":
        return False

    if not verify_password(plain_password=password, hashed_password=employee["password"]):
        return False
    return employee


async def get_current_identity(token: str = Depends(oauth2_bearer)) -> Identity:
    """Resolves the bearer token of this request to a verified identity."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        logger.info("Rejected token: %s", e)
        raise get_user_exception()

    data = payload.get("data") or {}
    username = data.get("sub")
    if username is None:
        raise get_user_exception()

    try:
        employee = await employees_collection.find_one({"username": username})
    except PyMongoError as e:
        logger.error("Directory lookup for %s failed: %s", username, e)
        raise HTTPException(status_code=503, detail="A backing service is unavailable, please retry later")

    if not employee:
        raise HTTPException(status_code=401, detail="User not found.")

    return to_identity(employee, session_id=data.get("sid"))
