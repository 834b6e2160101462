import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.repositories.interfaces import IUnitOfWork
from src.services.exceptions import ConflictError

logger = logging.getLogger(__name__)

class SqlalchemyUnitOfWork(IUnitOfWork):
    def __init__(self, db_session: Session):
        self.db = db_session

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Transaction rolled back on integrity error: %s", e.orig)
            raise ConflictError("The change conflicts with existing data.") from e
        except Exception:
            self.db.rollback()
            raise
