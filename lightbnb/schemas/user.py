"""
Pydantic schemas for user records written by the data access layer.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for inserting a new user. The password arrives already hashed."""

    name: str = Field(
        ...,
        description="User's display name",
        examples=["Eva Stanley"]
    )

    email: str = Field(
        ...,
        description="User's email address, unique across users",
        examples=["sebastianguerra@ymail.com"]
    )

    password: str = Field(
        ...,
        description="Hashed password credential",
        examples=["$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."]
    )
