from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class VerificationCreate(ApiModel):
    user_id: str = Field(min_length=1)
    ktp_url: str = Field(min_length=1)
    selfie_url: str = Field(min_length=1)
    bank_name: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    account_holder: str = Field(min_length=1)


class Verification(ApiModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    ktp_url: Optional[str] = None
    selfie_url: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_holder: Optional[str] = None
    status: str
    rejection_reason: Optional[str] = None
    created_at: datetime.datetime

    @classmethod
    def from_row(cls, row, user=None):
        return cls(
            id=row.id,
            user_id=row.user_id,
            user_name=user.name if user else None,
            user_email=user.email if user else None,
            ktp_url=row.ktp_image_url,
            selfie_url=row.selfie_image_url,
            bank_name=row.bank_name,
            account_number=row.bank_account_number,
            account_holder=row.bank_account_holder,
            status=row.status,
            rejection_reason=row.rejection_reason,
            created_at=row.created_at,
        )
