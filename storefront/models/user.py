from typing import Optional
from beanie import Indexed, PydanticObjectId

from storefront.core.constants import States, Scopes
from storefront.models.base import AuditedDocument


class Role(AuditedDocument):
    name: Indexed(str, unique=True)
    scope: str = Scopes.USER
    description: Optional[str] = None
    state: str = States.ACTIVE

    class Settings:
        name = "roles"


class User(AuditedDocument):
    email: Indexed(str, unique=True)
    password_hash: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    state: str = States.ACTIVE
    role_id: PydanticObjectId

    class Settings:
        name = "users"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
