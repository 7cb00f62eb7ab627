from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cipher_identifier.db.session import get_db_session
from cipher_identifier.services.pipeline.identifier import CipherIdentifier
from cipher_identifier.services.profiles.metadata import CipherCatalog


# Database session dependency
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with get_db_session(request.app.state.sessionmaker) as session:
        yield session

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


# Identification services built at startup
def get_identifier(request: Request) -> CipherIdentifier:
    """Get the shared cipher identifier."""
    return request.app.state.identifier

IdentifierDep = Annotated[CipherIdentifier, Depends(get_identifier)]


def get_catalog(request: Request) -> CipherCatalog:
    """Get the cipher metadata catalog."""
    return request.app.state.catalog

CatalogDep = Annotated[CipherCatalog, Depends(get_catalog)]
