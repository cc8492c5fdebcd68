from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContactRequestDTO(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    message: str = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")


class ContactSuccessDTO(BaseModel):
    success: bool = True
    message: str = "Message sent successfully"


class StatusDTO(BaseModel):
    success: bool = True
    message: str = "Portfolio backend running successfully"
