from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# MySQL DATETIME 은 기본이 초 단위라서 마이크로초(fsp=6)까지 저장하도록 지정
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


def utcnow() -> datetime:
    # DB에는 timezone 없는 UTC 값으로 저장
    return datetime.now(timezone.utc).replace(tzinfo=None)
