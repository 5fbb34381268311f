from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Field, Session, SQLModel, create_engine


INVOICES_KEY = "invoices"
LAST_SYNC_KEY = "lastSyncTime"


class StorageEntry(SQLModel, table=True):
    key: str = Field(primary_key=True)
    value: str = ""
    updated_at: str = Field(default_factory=lambda: datetime.now().isoformat())


def create_storage_engine(db_path: str) -> Engine:
    directory = os.path.dirname(os.path.abspath(db_path))
    os.makedirs(directory, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    SQLModel.metadata.create_all(engine)
    return engine


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


def read_entry(session: Session, key: str) -> Optional[str]:
    entry = session.get(StorageEntry, key)
    if entry is None:
        return None
    return entry.value


def write_entry(session: Session, key: str, value: str) -> None:
    entry = session.get(StorageEntry, key)
    if entry is None:
        entry = StorageEntry(key=key, value=value)
    else:
        entry.value = value
        entry.updated_at = datetime.now().isoformat()
    session.add(entry)
