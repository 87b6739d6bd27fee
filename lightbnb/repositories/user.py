"""
User repository for account lookups and registration.
Passwords arrive hashed; this layer never sees plain credentials.
"""

from typing import Any, Dict, Mapping, Optional, Union
import logging

from pydantic import ValidationError

from lightbnb.repositories.base import BaseRepository, coerce_int
from lightbnb.schemas.user import UserCreate
from lightbnb.utils.exceptions import DuplicateKeyError, MalformedInputError

logger = logging.getLogger(__name__)


GET_USER_WITH_EMAIL = """
    SELECT *
    FROM users
    WHERE users.email = $1
    """

GET_USER_WITH_ID = """
    SELECT *
    FROM users
    WHERE users.id = $1
    """

ADD_USER = """
    INSERT INTO users (name, email, password)
    VALUES ($1, $2, $3)
    RETURNING *;
    """


class UserRepository(BaseRepository):
    """Repository for the users table."""

    async def get_user_with_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Get a single user given their email.

        Args:
            email: Exact email address to match

        Returns:
            User row if found, None otherwise
        """
        return await self.fetch_one("get_user_with_email", GET_USER_WITH_EMAIL, [email])

    async def get_user_with_id(self, user_id: Union[int, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single user given their id.

        Args:
            user_id: Integer id, or its decimal string form

        Returns:
            User row if found, None otherwise

        Raises:
            MalformedInputError: If user_id is not an integer
        """
        return await self.fetch_one(
            "get_user_with_id", GET_USER_WITH_ID, [coerce_int(user_id, "user id")]
        )

    async def add_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Add a new user to the database.

        Args:
            user: name, email and hashed password

        Returns:
            The inserted user row, including its generated id

        Raises:
            DuplicateKeyError: If the email is already registered
        """
        if not isinstance(user, UserCreate):
            try:
                user = UserCreate.model_validate(dict(user))
            except ValidationError as e:
                raise MalformedInputError(f"invalid user record: {e}")

        try:
            created = await self.fetch_one(
                "add_user", ADD_USER, [user.name, user.email, user.password]
            )
        except DuplicateKeyError:
            logger.info(f"User with email {user.email} already exists")
            raise

        logger.info(f"Created user {created['email']} (ID: {created['id']})")
        return created
