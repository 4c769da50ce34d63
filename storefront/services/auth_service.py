# storefront/services/auth_service.py
import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import AuthError, CredentialsError, ValidationError
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from storefront.utils.settings import ACCESS_TOKEN_EXPIRE_MINUTES
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MOBILE_NUMBER_RE = re.compile(r"^\d{10}$")

# jeden komunikat dla nieznanego uzytkownika i zlego hasla
INVALID_CREDENTIALS = "Invalid credentials"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """
    Rejestracja, logowanie i weryfikacja tokenow.
    Tokeny sa bezstanowe (JWT), nic nie zapisujemy po stronie serwera.
    """

    def __init__(
        self,
        db: Session,
        token_ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repo = UserRepo(db)
        self.token_ttl = token_ttl if token_ttl is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        self.clock = clock

    def signup(
        self,
        fullname: str,
        handle: str,
        password: str,
        mobile_number: str,
        date_of_birth: date,
    ) -> str:
        fields = {
            "fullname": fullname,
            "handle": handle,
            "password": password,
            "mobileNumber": mobile_number,
        }
        missing = [name for name, value in fields.items() if not value or not str(value).strip()]
        if date_of_birth is None:
            missing.append("dateOfBirth")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        if self.repo.get_by_handle(handle):
            raise ValidationError("Handle is already taken")

        user = self.repo.create_user(
            UserModel(
                fullname=fullname,
                handle=handle,
                password_hash=get_password_hash(password),
                mobile_number=mobile_number,
                date_of_birth=date_of_birth,
            )
        )

        logger.info(f"User {user.id} signed up with handle {handle}")
        return user.id

    def _find_user(self, handle_or_mobile: str) -> UserModel | None:
        # ksztalt wejscia wybiera galaz: 10 cyfr to numer telefonu
        if MOBILE_NUMBER_RE.match(handle_or_mobile):
            return self.repo.get_by_mobile(handle_or_mobile)
        return self.repo.get_by_handle(handle_or_mobile)

    def login(self, handle_or_mobile: str, password: str) -> tuple[str, datetime, str]:
        """Zwraca (token, issued_at, user_id)."""
        if not handle_or_mobile or not password:
            raise ValidationError("Please provide both handle/mobile number and password")

        user = self._find_user(handle_or_mobile)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Rejected login attempt")
            raise CredentialsError(INVALID_CREDENTIALS)

        issued_at = self.clock()
        token = create_access_token(user.id, issued_at, self.token_ttl)

        logger.info(f"User {user.id} logged in")
        return token, issued_at, user.id

    def verify(self, token: Optional[str]) -> str:
        if not token:
            raise AuthError("Authentication token missing")

        try:
            payload = decode_access_token(token)
        except JWTError as e:
            logger.warning(f"Invalid token: {e}")
            raise AuthError("Authentication token invalid")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthError("Authentication token invalid")
        return user_id
