from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import ValidationError
from storefront.repos.base import store_call


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    @store_call
    def get_by_handle(self, handle: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.handle == handle)
        ).scalar_one_or_none()

    @store_call
    def get_by_mobile(self, mobile_number: str) -> UserModel | None:
        # numer nie jest unikalny, bierzemy najstarsze konto
        return self.db.execute(
            select(UserModel)
            .where(UserModel.mobile_number == mobile_number)
            .order_by(UserModel.created_at)
            .limit(1)
        ).scalar_one_or_none()

    @store_call
    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # wyscig dwoch rejestracji na ten sam handle
            self.db.rollback()
            raise ValidationError("Handle is already taken")
        self.db.refresh(user)
        return user
