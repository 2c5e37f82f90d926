from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from tasklist.domain.errors import StorageError

from .models import StorageItemModel

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def set_items(self, items: Mapping[str, str]) -> None: ...

    def remove_item(self, key: str) -> None: ...


class SqlKeyValueStorage:
    """String-valued key-value pairs in the ``storage_items`` table.

    Every pair belongs to a scope, so several independent task lists can share
    one database file.
    """

    def __init__(self, session_factory: sessionmaker, scope: str = "local") -> None:
        self._session_factory = session_factory
        self._scope = scope

    @property
    def scope(self) -> str:
        return self._scope

    def get_item(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                item = session.get(StorageItemModel, (self._scope, key))
                return item.value if item else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read {key!r} from scope {self._scope!r}") from exc

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    def set_items(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        try:
            with self._session_factory() as session:
                for key, value in items.items():
                    item = session.get(StorageItemModel, (self._scope, key))
                    if item is None:
                        session.add(StorageItemModel(scope=self._scope, key=key, value=value))
                    else:
                        item.value = value
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Storage write failed scope=%s keys=%s", self._scope, list(items))
            raise StorageError(f"Failed to write {list(items)} to scope {self._scope!r}") from exc

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                item = session.get(StorageItemModel, (self._scope, key))
                if not item:
                    return
                session.delete(item)
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to remove {key!r} from scope {self._scope!r}") from exc

    def keys(self) -> list[str]:
        try:
            with self._session_factory() as session:
                stmt = (
                    select(StorageItemModel.key)
                    .where(StorageItemModel.scope == self._scope)
                    .order_by(StorageItemModel.key.asc())
                )
                return list(session.scalars(stmt))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to list keys of scope {self._scope!r}") from exc
