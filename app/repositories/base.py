"""
Base repository class for the data access layer.

Repositories keep query logic in one place; the analytics engine only
ever sees the records they return.

Example:
    class LeagueRepository(BaseRepository[League]):
        def find_by_name(self, name: str) -> Optional[League]:
            return self.where_first(League.name == name)
"""
from abc import ABC
from typing import TypeVar, Generic, Type, Optional, List

from sqlalchemy import desc
from sqlalchemy.orm import Query, Session

T = TypeVar("T")


class BaseRepository(Generic[T], ABC):
    """
    Base repository bound to one model and a session.

    Attributes:
        model_type: The SQLAlchemy model class this repository manages
        db: The database session
    """

    def __init__(self, model_type: Type[T], db: Session):
        self.model_type = model_type
        self.db = db

    def query(self) -> Query:
        """Get a new query object for this model."""
        return self.db.query(self.model_type)

    def find_all(self, order_by: Optional[str] = None) -> List[T]:
        """
        Find all records.

        Args:
            order_by: Column name to order by (prefix with '-' for descending)
        """
        query = self.query()
        if order_by:
            if order_by.startswith('-'):
                query = query.order_by(desc(getattr(self.model_type, order_by[1:])))
            else:
                query = query.order_by(getattr(self.model_type, order_by))
        return query.all()

    def where_first(self, *criterion) -> Optional[T]:
        """Filter records using SQLAlchemy expressions and return first match."""
        return self.query().filter(*criterion).first()
