from inkwell.routes.auth import router as auth_router
from inkwell.routes.blog import router as blog_router
from inkwell.routes.health import router as health_router
from inkwell.routes.user import router as user_router

__all__ = ["auth_router", "blog_router", "health_router", "user_router"]
