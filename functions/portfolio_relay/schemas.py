"""
Pydantic schemas for the relay API.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ContactSubmission(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""


class ContactResponse(BaseModel):
    code: int
    status: str


class VisitPoint(BaseModel):
    date: str
    visits: int


class AnalyticsResponse(BaseModel):
    totalVisitors: int
    visitsOverTime: list[VisitPoint]


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
