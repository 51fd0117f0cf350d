"""Application service: registration and sign-in, both answering with a JWT."""
from __future__ import annotations
import random
from typing import Callable, Optional

from teamboard.application.base import AppService
from teamboard.core import security
from teamboard.domain.common.ids import new_id, now_iso
from teamboard.domain.common.result import Result
from teamboard.domain.user.models import User
from teamboard.domain.user.rules import MAX_SCORE, MIN_SCORE, validate_registration
from teamboard.persistence.interfaces.errors import DuplicateEntityError
from teamboard.persistence.interfaces.user_repository import UserRepository

SIGNIN_FAILED = "Wrong combination of email and password, or user does not exist."


class AuthAppService(AppService):
    def __init__(
        self,
        users: UserRepository,
        logger=None,
        hash_password: Callable[[str], str] = security.hash_password,
        verify_password: Callable[[str, str], bool] = security.verify_password,
        create_token: Callable[[str, str], str] = security.create_token,
    ):
        super().__init__(logger)
        self._users = users
        self._hash_password = hash_password
        self._verify_password = verify_password
        self._create_token = create_token

    def register(self, email: Optional[str], name: Optional[str], password: Optional[str]) -> Result[dict]:
        email_taken = bool(email) and self._users.get_by_email(email) is not None
        name_taken = bool(name) and self._users.get_by_name(name) is not None
        data_validation = validate_registration(email, name, password, email_taken, name_taken, logger=self._log)
        if data_validation.is_error:
            return Result.fail(data_validation)

        user = User(
            id=new_id(),
            email=email,
            name=name,
            hashed_password=self._hash_password(password),
            score=random.randint(MIN_SCORE, MAX_SCORE),
            created_at=now_iso(),
        )
        try:
            self._users.create(user)
        except DuplicateEntityError as e:
            return Result.fail(self._fail_if(True, "Email or name already exists.", 409, cause=e))

        self._log.info("user_registered", user=user.name)
        return Result.ok({"token": self._create_token(user.email, user.name)})

    def signin(self, email: Optional[str], password: Optional[str]) -> Result[dict]:
        user = self._users.get_by_email(email) if email else None
        user_is_valid = self._fail_if(user is None, SIGNIN_FAILED, 401, "User does not exist.", 404)
        if user_is_valid.is_error:
            return Result.fail(user_is_valid)

        password_is_valid = self._fail_if(
            not password or not self._verify_password(password, user.hashed_password),
            SIGNIN_FAILED,
            401,
            "Bad password.",
        )
        if password_is_valid.is_error:
            return Result.fail(password_is_valid)

        return Result.ok({"token": self._create_token(user.email, user.name)})
