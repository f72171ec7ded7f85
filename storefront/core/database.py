from sqlmodel import SQLModel, create_engine, Session
from storefront.core.config import settings


def _connect_args(database_url: str) -> dict:
    # SQLite necesita compartir la conexión entre los hilos del threadpool
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Crear el motor de la base de datos
engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,  # Mostrar consultas SQL
    pool_pre_ping=True,      # Verificar conexiones antes de usarlas
    connect_args=_connect_args(settings.database_url),
)


def create_db_and_tables():
    """Crear todas las tablas en la base de datos"""
    # Registrar los modelos en la metadata antes de crear las tablas
    import storefront.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Generador de sesiones de base de datos"""
    with Session(engine) as session:
        yield session
