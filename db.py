from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from config import settings
from models import Base  # ensure models are imported so metadata knows all tables

DATABASE_URL = settings.DATABASE_URL

# SQLite(테스트용)는 스레드 체크를 끄고 FK 제약을 켜야 ON DELETE 규칙이 동작함
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_db():
    Base.metadata.create_all(bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
