"""Auth Schemas — registration/login payloads and user summaries.

Invariants:
    - Credentials fields are optional at the schema level; presence is enforced by
      core.enforce_fields.require_fields so a blank value and a missing value both give 400
    - Responses never include the password hash
"""

from pydantic import BaseModel


class Credentials(BaseModel):
    """Body of POST /registro and POST /login."""
    usuario: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    """Public user data returned after registration."""
    id: int
    usuario: str
    perfil: str | None = None


class RegisterResponse(BaseModel):
    token: str
    usuario: UserSummary


class LoginResponse(BaseModel):
    """Login keeps the user fields flat next to the token."""
    token: str
    id: int
    usuario: str
    perfil: str | None = None
