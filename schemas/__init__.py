"""
Pydantic schemas for request/response serialization.

Separate from the forecasting engine and routes (HTTP layer).
"""

from schemas.forecast import (
    ForecastRequest,
    ForecastResponse,
    HistoryForecastRequest,
    ModelListResponse,
)

__all__ = [
    "ForecastRequest",
    "ForecastResponse",
    "HistoryForecastRequest",
    "ModelListResponse",
]
