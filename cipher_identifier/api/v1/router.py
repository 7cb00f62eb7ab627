from fastapi import APIRouter

from cipher_identifier.api.v1.endpoints import benchmark, ciphers, history, identify, statistics

api_router = APIRouter()

api_router.include_router(
    identify.router,
    prefix="/identify",
    tags=["Identification"],
)

api_router.include_router(
    statistics.router,
    prefix="/statistics",
    tags=["Statistics"],
)

api_router.include_router(
    ciphers.router,
    prefix="/ciphers",
    tags=["Ciphers"],
)

api_router.include_router(
    benchmark.router,
    prefix="/benchmark",
    tags=["Benchmark"],
)

api_router.include_router(
    history.router,
    prefix="/history",
    tags=["History"],
)
