# salesboard/core/gateway.py

import time
import logging
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesboard.core.config import DatabaseSettings
from salesboard.core.database import Base, build_engine, build_session_factory
from salesboard.core.errors import PersistenceFailure
from salesboard.models.salesRecord import SalesRecord

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """
    Owns the engine (and its connection pool) for the lifetime of the app.

    Created once at startup, closed at shutdown. Every batch write goes
    through `persist`, which runs in exactly one transaction.
    """

    def __init__(self, settings: DatabaseSettings):
        self.engine = build_engine(settings)
        self.session_local = build_session_factory(self.engine)

    def create_schema(self):
        Base.metadata.create_all(bind=self.engine)

    def close(self):
        self.engine.dispose()

    @contextmanager
    def session_scope(self):
        db: Session = self.session_local()
        try:
            yield db
            db.commit()
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()

    def persist(self, records: Iterable, deadline: Optional[float] = None) -> int:
        """
        Insert the records of one batch in order and commit them together.

        `deadline` is a `time.monotonic()` value; once it passes, the batch
        is rolled back. Raises PersistenceFailure when nothing was stored.
        """
        count = 0
        try:
            with self.session_scope() as db:
                for record in records:
                    _check_deadline(deadline)
                    db.add(SalesRecord(
                        item_name=record.item_name,
                        category=record.category,
                        sales=record.units_sold,
                        revenue=record.revenue,
                    ))
                    db.flush()
                    count += 1
                _check_deadline(deadline)
        except (SQLAlchemyError, TimeoutError) as e:
            logger.error("Batch rolled back at row %d: %s", count + 1, e)
            raise PersistenceFailure(str(e)) from e

        logger.info("Committed %d rows", count)
        return count

    def fetch_all(self, categories: Optional[Iterable[str]] = None) -> List[SalesRecord]:
        with self.session_scope() as db:
            query = db.query(SalesRecord)
            if categories is not None:
                query = query.filter(SalesRecord.category.in_(list(categories)))
            rows = query.order_by(SalesRecord.id).all()
            db.expunge_all()
        return rows

    def category_totals(self, categories: Optional[Iterable[str]] = None) -> Dict[str, Dict[str, float]]:
        with self.session_scope() as db:
            query = db.query(
                SalesRecord.category,
                func.coalesce(func.sum(SalesRecord.sales), 0).label("units_sold"),
                func.coalesce(func.sum(SalesRecord.revenue), 0).label("revenue"),
            )
            if categories is not None:
                query = query.filter(SalesRecord.category.in_(list(categories)))
            query = query.group_by(SalesRecord.category).order_by(SalesRecord.category)
            return {
                c: {"units_sold": float(u), "revenue": float(r)}
                for c, u, r in query.all()
                if c is not None
            }


def _check_deadline(deadline):
    if deadline is not None and time.monotonic() > deadline:
        raise TimeoutError("upload exceeded its time budget")
