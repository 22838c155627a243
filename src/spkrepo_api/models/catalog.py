# SPDX-License-Identifier: MIT
"""Pydantic models for reference data."""

from pydantic import BaseModel, ConfigDict, Field


class IdRequest(BaseModel):
    """Request body naming a row by id."""

    id: int


class ArchitectureModel(BaseModel):
    """Architecture row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str


class NewArchitecture(BaseModel):
    """Request body for creating an architecture."""

    model_config = ConfigDict(str_strip_whitespace=True)

    code: str = Field(..., min_length=1, max_length=20)


class FirmwareModel(BaseModel):
    """Firmware row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    version: str
    build: int


class NewFirmware(BaseModel):
    """Request body for creating a firmware."""

    model_config = ConfigDict(str_strip_whitespace=True)

    version: str = Field(..., min_length=1, max_length=3, description="Firmware version, e.g. 7.2")
    build: int = Field(..., ge=0, description="Firmware build number")


class LanguageModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str


class ServiceModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
