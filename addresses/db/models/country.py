"""Country reference table."""
from sqlalchemy import Column, String
from .base import Base

class Country(Base):
    """ISO 3166-1 country, keyed by its alpha-2 code."""

    __tablename__ = 'country'

    a2 = Column(String(2), primary_key=True)
    a3 = Column(String(3))
    name = Column(String(100), nullable=False)

    @classmethod
    def by_code(cls, session, code: str):
        """Query countries matching an alpha-2 code."""
        return session.query(cls).filter(cls.a2 == code.upper())

    def __repr__(self):
        return f"<Country(a2='{self.a2}', name='{self.name}')>"
