import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.core.config import settings
from storefront.core.database import create_db_and_tables
from storefront.core.errors import register_exception_handlers
from storefront.core.rate_limit import limiter
from storefront.core.request_id import RequestIdLogFilter, RequestIdMiddleware
from storefront.routers import discount_types, password_reset

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
)
for handler in logging.getLogger().handlers:
    handler.addFilter(RequestIdLogFilter())

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Eventos que se ejecutan al iniciar la aplicación"""
    logger.info(f"Iniciando {settings.app_name} ({settings.environment})")
    if settings.auto_create_db:
        create_db_and_tables()
    yield
    logger.info(f"Deteniendo {settings.app_name}")


# Crear la aplicación FastAPI
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="API de Storefront - restablecimiento de contraseñas y catálogo de descuentos",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
register_exception_handlers(app)

app.add_middleware(RequestIdMiddleware)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Incluir routers
app.include_router(password_reset.router, prefix="/api/v1")
app.include_router(discount_types.router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Endpoint raíz de la API"""
    return {
        "message": f"Bienvenido a {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
def health_check():
    """Endpoint para verificar el estado de la API"""
    return {"status": "healthy", "app": settings.app_name}
