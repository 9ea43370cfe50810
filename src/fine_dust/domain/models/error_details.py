"""Error details domain model."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Client-facing description of a failed lookup."""

    model_config = ConfigDict(frozen=True)

    status: str  # "fail" for client errors, "error" for server errors
    kind: str
    message: str
