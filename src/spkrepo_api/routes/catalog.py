# SPDX-License-Identifier: MIT
"""Architecture, firmware, language and service endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import catalog, get_session
from ..models.catalog import (
    ArchitectureModel,
    FirmwareModel,
    IdRequest,
    LanguageModel,
    NewArchitecture,
    NewFirmware,
    ServiceModel,
)
from .pagination import Page, get_page

router = APIRouter()


@router.get("/architecture", response_model=list[ArchitectureModel])
async def list_architectures(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[ArchitectureModel]:
    """Retrieve a page of architectures."""
    architectures = await catalog.find_all_architectures(session, page.limit, page.offset)
    return [ArchitectureModel.model_validate(a) for a in architectures]


@router.post("/architecture", response_model=ArchitectureModel)
async def create_architecture(
    body: NewArchitecture,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ArchitectureModel:
    """Add an architecture."""
    architecture = await catalog.create_architecture(session, body.code)
    return ArchitectureModel.model_validate(architecture)


@router.delete("/architecture", response_model=int)
async def delete_architecture(
    body: IdRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> int:
    """Delete an architecture by id, returning the number of deleted rows."""
    return await catalog.delete_architecture(session, body.id)


@router.get("/firmware", response_model=list[FirmwareModel])
async def list_firmware(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[FirmwareModel]:
    """Retrieve every firmware."""
    firmware = await catalog.find_all_firmware(session)
    return [FirmwareModel.model_validate(f) for f in firmware]


@router.post("/firmware", response_model=FirmwareModel)
async def create_firmware(
    body: NewFirmware,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FirmwareModel:
    """Add a firmware."""
    firmware = await catalog.create_firmware(session, body.version, body.build)
    return FirmwareModel.model_validate(firmware)


@router.delete("/firmware", response_model=int)
async def delete_firmware(
    body: IdRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> int:
    """Delete a firmware by id, returning the number of deleted rows."""
    return await catalog.delete_firmware(session, body.id)


@router.get("/language", response_model=list[LanguageModel])
async def list_languages(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[LanguageModel]:
    languages = await catalog.find_all_languages(session, page.limit, page.offset)
    return [LanguageModel.model_validate(lang) for lang in languages]


@router.get("/service", response_model=list[ServiceModel])
async def list_services(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[ServiceModel]:
    services = await catalog.find_all_services(session, page.limit, page.offset)
    return [ServiceModel.model_validate(s) for s in services]
