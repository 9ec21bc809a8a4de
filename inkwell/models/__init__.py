from inkwell.models.blog import BlogDB
from inkwell.models.user import UserDB

__all__ = ["BlogDB", "UserDB"]
