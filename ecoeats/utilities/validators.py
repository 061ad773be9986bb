"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional


class PantryItemInput(BaseModel):
    """Schema for a new pantry item."""
    product_name: str = Field(..., max_length=100)
    category: str = Field('Other', max_length=50)
    expiry_date: str = Field(..., min_length=1)
    quantity: float = Field(1, ge=0, le=100000)
    quantity_unit: Literal['kg', 'g', 'L', 'ml', 'pcs'] = 'pcs'
    image_url: Optional[str] = None

    @field_validator('product_name', 'category', 'expiry_date')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('product_name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Product name cannot be empty.')
        return v


class StatusUpdateInput(BaseModel):
    status: Literal['Used', 'Donated']


class BulkDeleteInput(BaseModel):
    item_ids: List[str] = Field(default_factory=list)


class DonationInput(BaseModel):
    """Schema for a donation confirmation."""
    item_ids: List[str] = Field(..., min_length=1)
    ngo_name: str = Field(..., min_length=1, max_length=200)

    @field_validator('ngo_name')
    @classmethod
    def validate_ngo(cls, v):
        if not v.strip():
            raise ValueError('NGO name cannot be empty')
        return v.strip()


class RedeemInput(BaseModel):
    reward_type: Literal['discount', 'cashback']


class SignUpInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
    password: str = Field(..., min_length=6)
    user_type: Literal['Consumer', 'Restaurant', 'NGO'] = 'Consumer'

    @field_validator('name', 'email')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()


class LoginInput(BaseModel):
    email: str
    password: str


class RecipeRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)

    @field_validator('ingredients')
    @classmethod
    def clean(cls, v):
        """Filter out empty ingredient names."""
        return [i.strip() for i in v if i and i.strip()]


class RecipeInput(BaseModel):
    """A generated recipe sent back when the user marks it cooked."""
    title: str = Field(..., min_length=1)
    ingredients: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    estimated_time: str = ''
    sustainability_tip: str = ''
    used_ingredients: List[str] = Field(default_factory=list)
