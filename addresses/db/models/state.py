"""State/province reference table."""
from sqlalchemy import Column, Integer, String, UniqueConstraint
from .base import Base

class State(Base):
    """State or province, scoped to its parent country."""

    __tablename__ = 'state'
    __table_args__ = (
        UniqueConstraint('country_a2', 'a2', name='uq_state_country_code'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    a2 = Column(String(2), nullable=False)
    country_a2 = Column(String(2), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    @classmethod
    def by_country(cls, session, country_code: str):
        """Query states belonging to a country."""
        return session.query(cls).filter(cls.country_a2 == country_code.upper())

    def __repr__(self):
        return f"<State(country_a2='{self.country_a2}', a2='{self.a2}', name='{self.name}')>"
