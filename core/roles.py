from enum import Enum


class UserRole(str, Enum):
    client = "client"
    admin = "admin"

    @property
    def landing_page(self) -> str:
        return "/admin" if self is UserRole.admin else "/client"
