from fastapi import APIRouter

from app.api.v1.endpoints import auth, users, reference_data, production, instructions

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(reference_data.router, prefix="/reference-data", tags=["reference-data"])
api_router.include_router(production.router, prefix="/production", tags=["production"])
api_router.include_router(instructions.router, prefix="/instructions", tags=["instructions"])
