from fastapi import APIRouter

from src.portfolio.api.v1 import auth, projects, testimonials

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(testimonials.router)
