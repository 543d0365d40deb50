"""
Pydantic models for ChatGPT usage status.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class RateLimitWindow(BaseModel):
    """One rate-limit window as reported by the backend"""
    used_percent: float
    limit_window_seconds: Optional[int] = None
    reset_at: Optional[int] = None  # Unix timestamp, passed through as-is


class RateLimitDetails(BaseModel):
    """Short (primary) and long (secondary) horizon windows"""
    primary_window: Optional[RateLimitWindow] = None
    secondary_window: Optional[RateLimitWindow] = None


class CreditStatusDetails(BaseModel):
    """Credit balance block"""
    has_credits: bool
    unlimited: bool
    balance: Optional[float] = None


class RateLimitStatusPayload(BaseModel):
    """Response body of the wham/usage endpoint"""
    plan_type: str
    rate_limit: Optional[RateLimitDetails] = None
    credits: Optional[CreditStatusDetails] = None


class UsageInfo(BaseModel):
    """Normalized usage snapshot for one stored account

    When ``error`` is set the record describes a failed fetch and the
    other optional fields carry no meaning.
    """
    model_config = ConfigDict(frozen=True)

    account_id: str
    plan_type: Optional[str] = None
    primary_used_percent: Optional[float] = None
    primary_window_minutes: Optional[int] = None
    primary_resets_at: Optional[int] = None
    secondary_used_percent: Optional[float] = None
    secondary_window_minutes: Optional[int] = None
    secondary_resets_at: Optional[int] = None
    has_credits: Optional[bool] = None
    unlimited_credits: Optional[bool] = None
    credits_balance: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def from_error(cls, account_id: str, error: str) -> "UsageInfo":
        return cls(account_id=account_id, error=error)
