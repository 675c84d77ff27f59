from pydantic import BaseModel


class Principal(BaseModel):
    """Identity claims carried by a verified bearer token."""

    id: str
    role: str
    email: str | None = None
    tenant_id: str | None = None
