from fastapi import APIRouter, Depends

from storefront.api.deps import get_auth_service
from storefront.domain.schemas import SignupIn, SignupOut, LoginIn, LoginOut
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupOut, status_code=201)
def signup(payload: SignupIn, auth: AuthService = Depends(get_auth_service)):
    user_id = auth.signup(
        fullname=payload.fullname,
        handle=payload.handle,
        password=payload.password,
        mobile_number=payload.mobile_number,
        date_of_birth=payload.date_of_birth,
    )
    return {"message": "User created successfully", "user_id": user_id}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    """Login po handle albo numerze telefonu. Token wazny godzine."""
    token, issued_at, user_id = auth.login(payload.handle, payload.password)
    return {"token": token, "user_id": user_id, "issued_at": issued_at}
