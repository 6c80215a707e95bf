from pydantic import BaseModel, ConfigDict, EmailStr


# Authenticated identity extracted from a verified token
class Principal(BaseModel):
    email: str


# Payload posted by the client after sign-in; extra profile fields are ignored
class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr


class TokenResponse(BaseModel):
    token: str
