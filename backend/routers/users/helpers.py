from fastapi import Depends
from config import get_store
from storage import MemStorage
from models import User, UserRole
from utils.errors import Conflict, InvalidCredentials, UserNotFound
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserHelpers:
    """Helper functions for user accounts"""

    def __init__(self, store: MemStorage):
        self.store = store

    def get_user(self, user_id: int) -> User:
        user = self.store.users.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.store.users.find_one(lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return self.store.users.find_one(lambda u: u.email.lower() == email)

    def register(self, **fields) -> User:
        """
        Create a customer account.
        Username and email must both be unused.
        """
        with self.store.lock:
            if self.get_user_by_username(fields["username"]):
                raise Conflict("Username already exists")
            if self.get_user_by_email(fields["email"]):
                raise Conflict("Email already registered")

            fields["role"] = UserRole.CUSTOMER
            user = self.store.users.create(**fields)

        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    def login(self, username: str, password: str) -> User:
        # Passwords are compared as stored; there is no hashing in this service
        user = self.get_user_by_username(username)
        if user is None or user.password != password:
            logger.warning(f"Failed login for username {username}")
            raise InvalidCredentials("Invalid username or password")
        return user

    def update_user(self, user_id: int, **fields) -> User:
        with self.store.lock:
            user = self.get_user(user_id)

            new_username = fields.get("username")
            if new_username and new_username != user.username:
                existing = self.get_user_by_username(new_username)
                if existing and existing.id != user.id:
                    raise Conflict("Username already exists")

            new_email = fields.get("email")
            if new_email and new_email.lower() != user.email.lower():
                existing = self.get_user_by_email(new_email)
                if existing and existing.id != user.id:
                    raise Conflict("Email already registered")

            updated = self.store.users.update(user.id, **fields)

        logger.info(f"Updated user {user_id}: {sorted(fields)}")
        return updated


def get_user_helpers(store: MemStorage = Depends(get_store)) -> UserHelpers:
    return UserHelpers(store)
