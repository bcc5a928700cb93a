"""
Base repository with the statement execution helpers shared by every data access operation.
Results are reshaped into plain dictionaries so callers never see ORM instances.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import Executable
from lightbnb.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

Record = Dict[str, Any]


class BaseRepository(Generic[ModelType]):
    """
    Base repository class running one statement per call.
    Reads return rows as dictionaries; writes commit immediately and roll back on failure.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    @property
    def columns(self) -> List:
        """All table columns, in declaration order (the ``table.*`` of a SELECT)."""
        return list(self.model.__table__.c)

    async def fetch_one(self, stmt: Executable) -> Optional[Record]:
        """
        Execute a statement and return its first row.

        Returns:
            Row as a dictionary, or None if the statement matched nothing
        """
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(self, stmt: Executable) -> List[Record]:
        """Execute a statement and return every row as a dictionary."""
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def insert_returning(self, stmt: Executable) -> Optional[Record]:
        """
        Execute an INSERT ... RETURNING statement and commit it.

        Args:
            stmt: Insert statement with a RETURNING clause

        Returns:
            The inserted row as a dictionary

        Raises:
            Exception: If database operation fails; the session is rolled back first
        """
        try:
            result = await self.db.execute(stmt)
            row = result.mappings().first()
            await self.db.commit()
            return dict(row) if row is not None else None
        except Exception:
            await self.db.rollback()
            raise
