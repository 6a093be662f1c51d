# ski_scheduler/adapters/inbound/api/router.py

from fastapi import APIRouter
from ski_scheduler.adapters.inbound.api.endpoints import auth_endpoint, lesson_endpoint, user_endpoint

api_router = APIRouter()

api_router.include_router(auth_endpoint.router, tags=["Auth"])
api_router.include_router(lesson_endpoint.router, tags=["Lessons"])
api_router.include_router(user_endpoint.router, tags=["Users"])
