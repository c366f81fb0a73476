from __future__ import annotations

import logging
from collections.abc import Mapping
from threading import Lock
from typing import Any, Protocol
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from kvsource.core.config import Settings, settings
from kvsource.core.errors import RecordConflict, RecordNotFound
from kvsource.db.session import Base, build_engine, build_session_factory
from kvsource.models.kv_record import KeyValueRecord
from kvsource.schemas.records import Record
from kvsource.services.coercion import to_text

_LOG = logging.getLogger("kvsource.record_store")


class RecordStore(Protocol):
    def find(self, key: str) -> Record | None:
        ...

    def create(self, key: str | None, value: Any) -> str:
        ...

    def upsert(self, key: str, value: Any) -> str:
        ...

    def update(self, key: str, value: Any) -> str:
        ...

    def delete(self, key: str) -> None:
        ...

    def list_all(self) -> list[Record]:
        ...


def _new_key() -> str:
    return str(uuid4())


def _key_or_new(key: str | None) -> str:
    if key is None or key == "":
        return _new_key()
    return str(key)


class InMemoryRecordStore:
    def __init__(self, initial: Mapping[str, Any] | None = None):
        self._data: dict[str, str] = {str(key): to_text(value) for key, value in (initial or {}).items()}
        self._lock = Lock()

    def find(self, key: str) -> Record | None:
        with self._lock:
            value = self._data.get(str(key))
        if value is None:
            return None
        return Record(key=str(key), value=value)

    def create(self, key: str | None, value: Any) -> str:
        record_key = _key_or_new(key)
        with self._lock:
            if record_key in self._data:
                _LOG.info("create rejected, key exists key=%s", record_key)
                raise RecordConflict(record_key)
            self._data[record_key] = to_text(value)
        return record_key

    def upsert(self, key: str, value: Any) -> str:
        record_key = str(key)
        with self._lock:
            # Assigning to an existing dict key keeps its listing position.
            self._data[record_key] = to_text(value)
        return record_key

    def update(self, key: str, value: Any) -> str:
        record_key = str(key)
        with self._lock:
            if record_key not in self._data:
                raise RecordNotFound(record_key)
            self._data[record_key] = to_text(value)
        return record_key

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(str(key), None)

    def list_all(self) -> list[Record]:
        with self._lock:
            items = list(self._data.items())
        return [Record(key=key, value=value) for key, value in items]


class SqlRecordStore:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _row(db, key: str) -> KeyValueRecord | None:
        return db.execute(select(KeyValueRecord).where(KeyValueRecord.key == key)).scalar_one_or_none()

    def find(self, key: str) -> Record | None:
        with self.session_factory() as db:
            row = self._row(db, str(key))
            if row is None:
                return None
            return Record(key=row.key, value=row.value)

    def create(self, key: str | None, value: Any) -> str:
        record_key = _key_or_new(key)
        with self.session_factory() as db:
            if self._row(db, record_key) is not None:
                _LOG.info("create rejected, key exists key=%s", record_key)
                raise RecordConflict(record_key)
            db.add(KeyValueRecord(key=record_key, value=to_text(value)))
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise RecordConflict(record_key) from exc
        return record_key

    def upsert(self, key: str, value: Any) -> str:
        record_key = str(key)
        with self.session_factory() as db:
            row = self._row(db, record_key)
            if row is None:
                db.add(KeyValueRecord(key=record_key, value=to_text(value)))
            else:
                row.value = to_text(value)
            try:
                db.commit()
            except IntegrityError:
                # Another writer inserted the key first; overwrite its value instead.
                db.rollback()
                _LOG.info("upsert insert lost race, updating key=%s", record_key)
                row = self._row(db, record_key)
                row.value = to_text(value)
                db.commit()
        return record_key

    def update(self, key: str, value: Any) -> str:
        record_key = str(key)
        with self.session_factory() as db:
            row = self._row(db, record_key)
            if row is None:
                raise RecordNotFound(record_key)
            row.value = to_text(value)
            db.commit()
        return record_key

    def delete(self, key: str) -> None:
        with self.session_factory() as db:
            row = self._row(db, str(key))
            if row is None:
                return
            db.delete(row)
            db.commit()

    def list_all(self) -> list[Record]:
        with self.session_factory() as db:
            rows = db.execute(select(KeyValueRecord).order_by(KeyValueRecord.id)).scalars().all()
            return [Record(key=row.key, value=row.value) for row in rows]


def build_record_store(config: Settings | None = None) -> RecordStore:
    config = config or settings
    backend = config.record_store_backend
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "sql":
        engine = build_engine(config.DATABASE_URL)
        Base.metadata.create_all(bind=engine, tables=[KeyValueRecord.__table__])
        _LOG.info("record store backend=sql url=%s", engine.url.render_as_string(hide_password=True))
        return SqlRecordStore(build_session_factory(engine))
    raise ValueError(f"Unknown record store backend: {backend}")
