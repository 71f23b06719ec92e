from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DonationRequestCreatePayload(BaseModel):
    """Descriptive fields only; status, requester and donor fields are server owned."""

    model_config = ConfigDict(populate_by_name=True)

    recipient_name: str = Field(..., alias="recipientName", min_length=1, max_length=120)
    hospital_name: str = Field(..., alias="hospitalName", min_length=1, max_length=160)
    full_address: Optional[str] = Field(None, alias="fullAddress", max_length=300)
    blood_group: str = Field(..., alias="bloodGroup", min_length=1, max_length=8)
    district: str = Field(..., min_length=1, max_length=80)
    upazila: str = Field(..., min_length=1, max_length=80)
    donation_date: str = Field(..., alias="donationDate", min_length=1, max_length=40)
    donation_time: str = Field(..., alias="donationTime", min_length=1, max_length=40)
    request_message: Optional[str] = Field(None, alias="requestMessage", max_length=2000)


class DonationRequestUpdatePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recipient_name: Optional[str] = Field(None, alias="recipientName", max_length=120)
    hospital_name: Optional[str] = Field(None, alias="hospitalName", max_length=160)
    full_address: Optional[str] = Field(None, alias="fullAddress", max_length=300)
    blood_group: Optional[str] = Field(None, alias="bloodGroup", max_length=8)
    district: Optional[str] = Field(None, max_length=80)
    upazila: Optional[str] = Field(None, max_length=80)
    donation_date: Optional[str] = Field(None, alias="donationDate", max_length=40)
    donation_time: Optional[str] = Field(None, alias="donationTime", max_length=40)
    request_message: Optional[str] = Field(None, alias="requestMessage", max_length=2000)


class DonationClaimPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    donor_name: Optional[str] = Field(None, alias="donorName", max_length=120)


class DonationStatusPayload(BaseModel):
    status: str
