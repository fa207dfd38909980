"""Use cases for managing users."""

from .authenticate_user import authenticate_user
from .create_user import create_user
from .delete_user import delete_own_account, delete_user
from .list_users import list_users
from .update_user_role import update_user_role

__all__ = [
    "authenticate_user",
    "create_user",
    "delete_own_account",
    "delete_user",
    "list_users",
    "update_user_role",
]
