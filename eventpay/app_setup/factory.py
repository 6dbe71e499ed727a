"""
Factory d'application utilisée par les entrypoints (eventpay.asgi, python -m eventpay).
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_no_cache_middleware
from .security import register_security_middleware
from .exceptions import register_exception_handlers, register_unhandled_error_middleware
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - le filet 500 générique (ajouté en premier: il s'exécute à l'intérieur de CORS)
      - middlewares de base, en-têtes de sécurité, no-cache
      - gestionnaires d'exceptions (enveloppe {"success": false, "message"})
      - tous les routers /api
    """
    app = FastAPI(title="Event Booking API", lifespan=lifespan)
    register_unhandled_error_middleware(app)
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
