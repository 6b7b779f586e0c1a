import logging
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pymongo.errors import PyMongoError
from schemas.employee import Identity
from utils.app_utils import Token, authenticate_user, get_current_identity, new_session_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends()):
    """
    Handles employee authentication and issues a session token.
    Every successful login opens a new session, identified by a fresh
    session id carried inside the JWT. Nothing about the caller is kept in
    process memory; later requests are authorized from the token alone.
    Args:
        form_data (OAuth2PasswordRequestForm): Form containing username and password
    Returns:
        dict: Contains the access token, token type and session id
            {
                "access_token": str,
                "token_type": "bearer",
                "session_id": str
            }
    Raises:
        HTTPException: 401 Unauthorized if login credentials are invalid
    """
    try:
        user = await authenticate_user(username=form_data.username, password=form_data.password)
    except PyMongoError as e:
        logger.error("Login lookup failed: %s", e)
        raise HTTPException(status_code=503, detail="A backing service is unavailable, please retry later")

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid login details",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = new_session_token(user["username"])
    logger.info("Opened session %s for %s", token.session_id, user["username"])
    return token


@router.get("/me", response_model=Identity)
async def read_current_identity(identity: Identity = Depends(get_current_identity)):
    return identity
