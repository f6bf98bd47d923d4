"""
SQLAlchemy ORM models for review-store persistence.

A review store is kept as a single JSON document per user and scope.
"""

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ReviewStoreDocument(Base):
    """
    Persisted ReviewStore for one (user_id, domain, direction).
    """
    __tablename__ = 'review_stores'

    # Primary key: composite of user_id, domain and direction
    user_id = Column(String(255), primary_key=True, nullable=False)
    domain = Column(String(50), primary_key=True, nullable=False)
    direction = Column(String(50), primary_key=True, nullable=False)

    document = Column(JSON, nullable=False)  # ReviewStoreDoc wire format
    last_rollover_date = Column(String(10), nullable=False)  # YYYY-MM-DD
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<ReviewStoreDocument({self.user_id}, {self.domain}, {self.direction})>"
