from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session

from ..core.errors import InvalidCredentialsError, UserAlreadyExistsError
from ..core.security import create_access_token, hash_password, verify_password
from ..models import LoginRequest, LoginResponse, RegisterRequest, UserModel, UserResponse
from .repository import BankRepository


logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        session: Session,
        repository: Optional[BankRepository] = None,
    ) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def register(self, payload: RegisterRequest) -> UserModel:
        email = payload.email.strip().lower()
        if self.repository.get_user_by_email(email) is not None:
            raise UserAlreadyExistsError("User already exists")

        user = self.repository.add_user(email, hash_password(payload.password))
        self.session.commit()
        self.session.refresh(user)
        logger.info("user.registered", extra={"user_id": user.id})
        return user

    def login(self, payload: LoginRequest) -> LoginResponse:
        user = self.repository.get_user_by_email(payload.email.strip().lower())
        if user is None or not verify_password(payload.password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")

        logger.info("user.logged_in", extra={"user_id": user.id})
        return LoginResponse(
            token=create_access_token(user.id),
            user=UserResponse.model_validate(user),
        )
