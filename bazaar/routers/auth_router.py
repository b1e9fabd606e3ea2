from fastapi import APIRouter, HTTPException, Depends
from datetime import timedelta
from ..services import AuthService, jwt_service
from ..security import ensure_logged_out, get_current_user_id
from ..schemas import UserCreate, UserPublic, UserLogin
from ..exceptions import ConflictError
from ..utils import map_user_to_public_dict
from ..services.jwt_service import ACCESS_TOKEN_EXPIRE_MINUTES

router = APIRouter(tags=["Auth"])

@router.post("/register", response_model=UserPublic, status_code=201, dependencies=[Depends(ensure_logged_out)])
async def register_user(user_data: UserCreate):
    """
    Register a new user.
    - Callers must not be logged in.
    - Returns 409 if the username is taken.
    """
    try:
        new_user = await AuthService.register_user(
            username=user_data.username,
            password=user_data.password
        )
        return map_user_to_public_dict(new_user)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.detail)

@router.post("/login", dependencies=[Depends(ensure_logged_out)])
async def login_for_access_token(login_data: UserLogin):
    """
    Log in with username and password and receive a bearer token.
    """
    user = await AuthService.login_user(
        username=login_data.username,
        password=login_data.password
    )
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = jwt_service.create_access_token(
        data={"sub": str(user.id)}, expires_delta=access_token_expires
    )

    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/logout")
async def logout(current_user_id: str = Depends(get_current_user_id)):
    """
    End the session. Tokens are stateless, the client discards its token.
    """
    return {"message": "Logged out."}
