# src/gridrr/schemas/verification.py
"""Verification admin schemas."""

from pydantic import BaseModel


class VerificationActionResponse(BaseModel):
    """Acknowledgement for an admin verification action."""

    success: bool = True


class SweepResponse(BaseModel):
    """Users newly flagged by an on-demand sweep."""

    flagged: list[int]
