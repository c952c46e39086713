"""User service for document store operations."""

from typing import Optional

from logger import get_logger
from models.user import User
from store import paths

logger = get_logger()


class UserService:
    """Service for the single user document."""

    def __init__(self, store):
        """Initialize the user service.

        Args:
            store: DocumentStore holding the user document.
        """
        self.store = store

    def find(self) -> Optional[User]:
        """Get the user without creating one.

        Returns:
            User object if user.json exists, None otherwise.
        """
        document = self.store.read(paths.USER_FILE)
        return User.from_dict(document) if document else None

    def get_or_create(self) -> User:
        """Get the user, creating it on first run.

        Returns:
            The existing or newly created User.
        """
        user = self.find()
        if user:
            logger.debug("user.json found, reusing existing user")
            return user

        logger.info("user.json not found, creating new user")
        user = User()
        self.store.write(paths.USER_FILE, user.to_dict())
        return user
