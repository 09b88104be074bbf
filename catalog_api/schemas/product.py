from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class ProductPayload(BaseModel):
    """Validated, immutable product fields produced by the validators."""
    name: str = Field(..., min_length=1, description="Product name, trimmed")
    price: float = Field(..., description="Product price")
    description: str = Field("", description="Product description")
    quantity: int = Field(..., description="Quantity on hand")

    model_config = ConfigDict(frozen=True)


class ProductResponse(BaseModel):
    """Schema for a stored product."""
    id: int
    name: str
    price: float
    description: str
    quantity: int


class MessageResponse(BaseModel):
    """Confirmation body for operations without a record to return."""
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
    details: Optional[str] = None
