from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.cache import cache
from app.schemas.response import APIResponse
from app.schemas.token import LoginRequest, Token
from app.schemas.user import User, UserCreate
from app.services.auth import auth_service
from app.utils import deps

router = APIRouter()

@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=APIResponse[User])
def signup(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate
):
    """Create a learner account."""
    new_user = auth_service.signup(db=db, user_in=user_in)
    return APIResponse(message="Account created successfully", data=User.model_validate(new_user))

@router.post("/login", response_model=APIResponse[Token])
def login_for_access_token(
    request: LoginRequest,
    db: Session = Depends(deps.get_db)
):
    token = auth_service.login(db=db, email=request.email, password=request.password)
    return APIResponse(message="Login successful", data=token)

@router.post("/logout", status_code=status.HTTP_200_OK, response_model=APIResponse[None])
async def logout(
    db: Session = Depends(deps.get_transactional_db),
    token: str = Depends(deps.get_token),
    current_user: User = Depends(deps.get_current_user)
):
    """Invalidate the current access token by adding it to the denylist."""
    auth_service.logout(db=db, token=token)
    await cache.invalidate_user_cache(current_user.id)
    return APIResponse(message="Logout successful")
