from typing import List, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
import jwt

from banner_service.core.security import decode_access_token
from banner_service.db.banner_store import BannerStore
from banner_service.db.session import get_db

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_roles(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> List[str]:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        roles = [roles]
    return roles

def require_roles(*allowed: str):
    def checker(roles: List[str] = Depends(get_current_roles)):
        if not any(r in roles for r in allowed):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return checker

def get_store(db: Session = Depends(get_db)) -> BannerStore:
    return BannerStore(db)
