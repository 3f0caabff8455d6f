"""API routes"""

from fastapi import APIRouter
from .auth import router as auth_router
from .users import router as users_router
from .friends import router as friends_router
from .reviews import router as reviews_router
from .comments import router as comments_router
from .uploads import router as uploads_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(friends_router, prefix="/friends", tags=["friends"])
api_router.include_router(reviews_router, prefix="/reviews", tags=["reviews"])
api_router.include_router(comments_router, prefix="/reviews", tags=["comments"])
api_router.include_router(uploads_router, tags=["uploads"])
