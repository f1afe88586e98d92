"""Authentication descriptors"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class BearerAuth(BaseModel):
    """Bearer token authentication

    The token is taken from ``token`` or, when empty, looked up under ``key``
    in the client's credential store.
    """

    type: Literal["Bearer"] = "Bearer"
    token: Optional[str] = Field(None, description="Bearer token")
    header: Optional[str] = Field(None, description="Header name (default Authorization)")
    key: Optional[str] = Field(None, description="Credential store key holding the token")

    model_config = {"frozen": True}


class BasicAuth(BaseModel):
    """HTTP Basic authentication"""

    type: Literal["Basic"] = "Basic"
    login: str = Field("", description="Login")
    password: str = Field("", description="Password")
    header: Optional[str] = Field(None, description="Header name (default Authorization)")

    model_config = {"frozen": True}


Auth = Annotated[Union[BearerAuth, BasicAuth], Field(discriminator="type")]
