from fastapi import APIRouter

from cipher_identifier.dependencies import CatalogDep, IdentifierDep
from cipher_identifier.models.schemas import CipherInfo, CiphersResponse

router = APIRouter()


@router.get(
    "",
    response_model=CiphersResponse,
    summary="List known ciphers",
    description="Cipher families in the reference profile store, with their metadata.",
)
async def list_ciphers(
    identifier: IdentifierDep,
    catalog: CatalogDep,
) -> CiphersResponse:
    """List every cipher that can be ranked, in profile order."""
    items = [
        CipherInfo(
            name=profile.name,
            primary_type=catalog.primary_type(profile.name),
            metadata=catalog.get(profile.name),
            expected=profile.as_dict(),
        )
        for profile in identifier.store
    ]
    return CiphersResponse(items=items, total=len(items))
