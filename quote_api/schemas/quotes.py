from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """
    A single quote from the static collection. Immutable once loaded.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0, description="Unique, stable quote ID")
    text: str = Field(..., min_length=1, description="Quote text")
    author: str = Field(..., min_length=1, description="Person the quote is attributed to")
