from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from shared import load_service_config

_config = load_service_config("site")
DATABASE_URL = _config.database.url

# sqlite (testes) é acessado pela thread do carregador de tenants do cache
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, future=True, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
Base = declarative_base()


def get_db():
    """Sessão por requisição, fechada ao fim do request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
