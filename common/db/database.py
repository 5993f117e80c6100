from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from common.config.settings import DATABASE_URL, DB_ECHO


def configure_sqlite_engine(sqlite_engine: Engine) -> Engine:
    """
    SQLite за замовчуванням відкриває "ледачі" транзакції, тому дві паралельні
    перевірки доступності можуть пройти одночасно. BEGIN IMMEDIATE бере
    блокування на запис одразу, і записи до БД виконуються послідовно.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return sqlite_engine


def build_engine(url: str = DATABASE_URL, echo: bool = DB_ECHO) -> Engine:
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
        return configure_sqlite_engine(sqlite_engine)
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
