from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool
from portfolio_api.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sessions are handed to FastAPI's thread pool.
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    poolclass=QueuePool,
    pool_size=settings.db_pool_size,
    max_overflow=10,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database session generator for FastAPI dependency injection"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def pool_metrics(bind=None) -> dict:
    pool = (bind or engine).pool
    return {
        "pool_class": pool.__class__.__name__,
        "size": pool.size() if hasattr(pool, "size") else None,
        "checked_out": pool.checkedout() if hasattr(pool, "checkedout") else None,
        "overflow": pool.overflow() if hasattr(pool, "overflow") else None,
        "timeout": pool.timeout() if hasattr(pool, "timeout") else None,
    }


def check_database(bind=None) -> None:
    """Run a trivial query; raises when the database is unreachable."""
    with (bind or engine).connect() as connection:
        connection.execute(text("SELECT 1"))
