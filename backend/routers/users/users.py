from fastapi import APIRouter, Depends, HTTPException, status
from utils.response_helpers import safe_model_validate, user_to_dict
from .schemas import UserRegister, UserLogin, UserUpdate, UserResponse, LoginResponse
from .helpers import UserHelpers, get_user_helpers
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

# Fields a PATCH may clear by sending null
NULLABLE_USER_FIELDS = {"phone", "address", "city", "pincode"}


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    users: UserHelpers = Depends(get_user_helpers)
):
    """
    Register a new customer account. 409 if the username or email is taken.
    """
    try:
        user = users.register(**user_data.model_dump())
        return safe_model_validate(UserResponse, user_to_dict(user))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user"
        )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    users: UserHelpers = Depends(get_user_helpers)
):
    """
    Check a username/password pair and return the user without the password.
    No session or token is issued.
    """
    try:
        user = users.login(credentials.username, credentials.password)
        return LoginResponse(user=safe_model_validate(UserResponse, user_to_dict(user)))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to login"
        )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    users: UserHelpers = Depends(get_user_helpers)
):
    try:
        user = users.get_user(user_id)
        return safe_model_validate(UserResponse, user_to_dict(user))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user"
        )


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    users: UserHelpers = Depends(get_user_helpers)
):
    """Update profile fields; only the fields sent are changed"""
    try:
        update_data = {
            field: value
            for field, value in user_update.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_USER_FIELDS
        }
        user = users.update_user(user_id, **update_data)
        return safe_model_validate(UserResponse, user_to_dict(user))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user"
        )
