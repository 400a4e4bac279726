"""
Decode Schemas
==============
Request and response models for decode endpoints.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from contribution_decoder.model.contribution import Contribution


class DecodeRequest(BaseModel):
    """Request to decode a payload"""

    payload: str = Field(..., min_length=1, description="Standard base64 of the CBOR payload")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"payload": "oWRkYXRhgaJmYnVja2V0QQFldmFsdWVBAg=="}
        }
    )


class ContributionOut(BaseModel):
    """One decoded, non-zero contribution"""

    model_config = ConfigDict(populate_by_name=True)

    index: int
    bucket_in_binary: str = Field(..., alias="bucketInBinary")
    value_in_binary: str = Field(..., alias="valueInBinary")
    bucket_in_decimal: str = Field(..., alias="bucketInDecimal")
    value_in_decimal: str = Field(..., alias="valueInDecimal")

    @classmethod
    def from_record(cls, record: Contribution) -> "ContributionOut":
        return cls(**record.to_dict())


class DiagnosticOut(BaseModel):
    """Why an item (or the whole payload) produced no row"""

    reason: str
    message: str
    index: Optional[int] = None


class DecodeResponse(BaseModel):
    """Response from a decode operation"""

    status: str = Field(..., description="complete (rows found) or empty")
    count: int = Field(default=0)
    contributions: List[ContributionOut] = Field(default_factory=list)
    diagnostics: List[DiagnosticOut] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "complete",
                "count": 1,
                "contributions": [
                    {
                        "index": 0,
                        "bucketInBinary": "1",
                        "valueInBinary": "10",
                        "bucketInDecimal": "1",
                        "valueInDecimal": "2",
                    }
                ],
                "diagnostics": [],
            }
        }
    )
