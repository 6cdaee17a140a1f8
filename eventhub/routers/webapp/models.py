"""
WebApp API Pydantic Models

Request bodies shared by the webapp endpoints.
"""
from pydantic import BaseModel, Field


# ==================== AUTH MODELS ====================

class LoginRequest(BaseModel):
    email: str
    password: str


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    event_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or less removes the line
