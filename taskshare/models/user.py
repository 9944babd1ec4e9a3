from pydantic import BaseModel, ConfigDict, EmailStr, TypeAdapter

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """Return the address in the form it is stored, with the domain lowercased."""
    return str(_email_adapter.validate_python(email))


class UserModel(BaseModel):
    """
    A team member authenticated through Google OAuth.
    Created on first login and never edited afterwards.
    """

    id: int
    email: EmailStr
    name: str
    picture: str | None = None
    external_id: str

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ExternalIdentityAssertion(BaseModel):
    """Verified profile handed over by the identity provider after the OAuth handshake."""

    external_id: str
    email: str | None = None
    name: str | None = None
    picture: str | None = None
