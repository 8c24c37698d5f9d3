# finsight/schemas/alerts.py
"""Pydantic schemas for price alerts."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finsight.models import AlertCondition
from finsight.schemas.pagination import PaginationMeta
from finsight.schemas.validators import validate_symbol


class AlertCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    symbol: str = Field(..., min_length=1, max_length=20, examples=["AAPL"])
    condition: AlertCondition = Field(
        ...,
        description="GT fires when price rises above target, LT when it falls below"
    )
    price: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=8,
        description="Target price"
    )

    @field_validator('symbol')
    @classmethod
    def validate_and_normalize_symbol(cls, v: str) -> str:
        return validate_symbol(v)


class AlertResponse(BaseModel):
    id: int
    user_id: int
    symbol: str
    condition: AlertCondition
    price: Decimal
    triggered: bool
    triggered_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AlertListResponse(BaseModel):
    items: list[AlertResponse]
    pagination: PaginationMeta


class AlertEvaluationResponse(BaseModel):
    checked: int = Field(..., ge=0, description="Alerts compared against a price")
    skipped: int = Field(..., ge=0, description="Alerts without a snapshot price")
    triggered: list[int] = Field(..., description="IDs triggered by this sweep")
