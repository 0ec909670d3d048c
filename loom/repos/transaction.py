# loom/repos/transaction.py
from typing import Any, Callable, Dict, List, Tuple, TypeVar

from sqlalchemy import update
from sqlalchemy.orm import Session

from loom.domain.errors import TransactionConflict
from loom.utils.logging import get_logger
from loom.utils.retry import transaction_retry

logger = get_logger(__name__)

T = TypeVar("T")


class Transaction:
    """
    Optimistic unit of work over a Session.

    get() remembers the version of every row it reads, update() and add()
    only buffer writes. commit() re-checks each read row with
    UPDATE ... WHERE id = :id AND version = :read_version, so a row changed by
    somebody else since our read matches nothing and the whole transaction
    is rejected with TransactionConflict. Written rows get version + 1, rows
    that were only read keep their version.

    Versioned models need ``id`` and ``version`` columns.
    """

    def __init__(self, db: Session):
        self.db = db
        self._read_versions: Dict[Tuple[type, str], int] = {}
        self._updates: Dict[Tuple[type, str], Dict[str, Any]] = {}
        self._inserts: List[Any] = []

    def get(self, model, key: str):
        #always a fresh read, never the identity map copy from an earlier attempt
        obj = self.db.get(model, key, populate_existing=True)
        if obj is not None:
            self._read_versions.setdefault((model, key), obj.version)
        return obj

    def update(self, model, key: str, **values):
        if (model, key) not in self._read_versions:
            raise RuntimeError(f"{model.__tablename__}/{key} must be read before it is written")
        self._updates.setdefault((model, key), {}).update(values)

    def add(self, obj):
        self._inserts.append(obj)

    def commit(self):
        for (model, key), version in self._read_versions.items():
            values = self._updates.get((model, key))
            new_version = version + 1 if values else version
            result = self.db.execute(
                update(model)
                .where(model.id == key, model.version == version)
                .values(**(values or {}), version=new_version)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise TransactionConflict(model.__tablename__, key)

        for obj in self._inserts:
            self.db.add(obj)

        self.db.commit()


def run_transaction(db: Session, fn: Callable[[Transaction], T]) -> T:
    """
    Runs fn inside an optimistic transaction and commits its writes.

    fn may be invoked more than once: on a conflicting concurrent commit the
    session is rolled back and fn is called again against fresh reads. Only
    the writes buffered on the Transaction are atomic, anything else fn does
    must tolerate being repeated.
    """

    @transaction_retry()
    def attempt() -> T:
        tx = Transaction(db)
        try:
            result = fn(tx)
            tx.commit()
            return result
        except Exception:
            db.rollback()
            raise

    return attempt()
