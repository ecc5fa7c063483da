from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import settings
from app.core.metrics import auth_token_validations_total
from app.db.mongodb import get_database
from app.models.user import User
from app.repositories import UserRepository

# Tokens are issued by the auth service; this API only validates them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/login/access-token")


async def get_current_user(
    db: AsyncIOMotorDatabase = Depends(get_database),
    token: str = Depends(oauth2_scheme),
) -> User:
    """Resolve the bearer token to a stored user. The `sub` claim is the user id."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        auth_token_validations_total.labels(result="invalid").inc()
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id or payload.get("type", "access") != "access":
        auth_token_validations_total.labels(result="invalid").inc()
        raise credentials_exception

    user = await UserRepository(db).get_by_id(str(user_id))
    if user is None:
        auth_token_validations_total.labels(result="unknown_user").inc()
        raise credentials_exception

    auth_token_validations_total.labels(result="valid").inc()
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
