"""
User Entity

Represents an account that can recover its password.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - account owner and the state of a pending password reset.

    Business Rules:
    - Email must be unique across all users
    - At most one reset token per user (a new request overwrites it)
    - pwd_reset_token and pwd_reset_token_expires are set and cleared together
    - Credentials are a salt plus derived key; iterations is the hash cost
      carried over from a previous hashing scheme
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(default="", max_length=255)

    # Alternate recovery channels
    recovery_email: Optional[str] = Field(default=None, index=True, max_length=255)
    recovery_phone: Optional[str] = Field(default=None, index=True, max_length=32)
    recovery_field: Optional[str] = Field(default=None, index=True, max_length=255)

    # Pending password reset
    pwd_reset_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    pwd_reset_token_expires: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Credentials
    salt: Optional[str] = Field(default=None, max_length=64)
    derived_key: Optional[str] = Field(default=None, max_length=128)
    iterations: Optional[int] = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    def clear_reset_token(self) -> None:
        self.pwd_reset_token = None
        self.pwd_reset_token_expires = None
