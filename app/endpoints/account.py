from fastapi import APIRouter, Depends

from app.models.user import User as UserModel
from app.schemas.response import APIResponse
from app.schemas.user import User
from app.utils import deps

router = APIRouter()

@router.get("/me", response_model=APIResponse[User])
def read_current_user(current_user: UserModel = Depends(deps.get_current_user)):
    return APIResponse(message="User retrieved successfully", data=User.model_validate(current_user))
