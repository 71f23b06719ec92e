"""Pydantic schemas for funding API endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class FundingCreateRequest(BaseModel):
    """Donor fields are only used when the caller is anonymous."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(..., gt=0, description="Whole currency units")
    donor_name: Optional[str] = Field(None, alias="donorName", max_length=120)
    donor_email: Optional[EmailStr] = Field(None, alias="donorEmail")
    transaction_id: Optional[str] = Field(None, alias="transactionId", max_length=255)


class PaymentIntentRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Whole currency units")
