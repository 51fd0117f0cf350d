"""Business rules for user registration."""
from __future__ import annotations
import re
from typing import Optional

from teamboard.domain.common.result import Result

EMAIL_FORMAT = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")
MIN_NAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 8

# Scores are assigned at registration, inclusive bounds
MIN_SCORE = 1
MAX_SCORE = 100


def validate_registration(
    email: Optional[str],
    name: Optional[str],
    password: Optional[str],
    email_taken: bool,
    name_taken: bool,
    logger=None,
) -> Result[None]:
    return Result.merge([
        Result.fail_if(
            not email or not name or not password,
            "Email, name, and password must be provided.",
            logger=logger,
        ),
        Result.fail_if(email_taken, "Email already exists.", 409, logger=logger),
        Result.fail_if(name_taken, "Name already exists.", 409, logger=logger),
        Result.fail_if(bool(email) and not EMAIL_FORMAT.match(email), "Invalid email format.", logger=logger),
        Result.fail_if(
            bool(name) and len(name) < MIN_NAME_LENGTH,
            "Name must be at least 4 characters long.",
            logger=logger,
        ),
        Result.fail_if(
            bool(password) and len(password) < MIN_PASSWORD_LENGTH,
            "Password must be at least 8 characters long.",
            logger=logger,
        ),
    ])
