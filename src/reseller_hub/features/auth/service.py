"""Business logic for authentication, such as user retrieval."""
from typing import Optional
from . import models

async def get_user_by_username(username: str) -> Optional[models.User]:
    """Retrieves a user by their username.

    Args:
        username: The username of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    user = await models.User.get_or_none(username=username)
    return user

async def create_user(username: str, email: str, hashed_password: str, role: models.UserRole) -> models.User:
    """Creates a new user in the database.

    Args:
        username: Login name, must be unique.
        email: Contact address, must be unique.
        hashed_password: The bcrypt hash of the user's password.
        role: The role stored on the user and embedded in issued tokens.

    Returns:
        The newly created User object.
    """
    return await models.User.create(
        username=username, email=email, hashed_password=hashed_password, role=role
    )
