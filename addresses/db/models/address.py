"""Address model for storing user postal addresses."""
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from .base import Base

class Address(Base):
    """SQLAlchemy model for the address table."""

    __tablename__ = 'address'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    addressee = Column(String(100))
    organization = Column(String(100))
    line1 = Column(Text, nullable=False)
    line2 = Column(Text)
    city = Column(String(100), nullable=False)
    state = Column(String(2))
    postal_code = Column(String(20))
    country = Column(String(2), nullable=False, default='US')
    phone = Column(String(30))
    is_primary = Column(Boolean, nullable=False, default=False)
    is_billing = Column(Boolean, nullable=False, default=False)
    is_shipping = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Columns callers may set from input; user_id is bound by the repository
    FILLABLE = (
        'addressee',
        'organization',
        'line1',
        'line2',
        'city',
        'state',
        'postal_code',
        'country',
        'phone',
        'is_primary',
        'is_billing',
        'is_shipping',
    )

    def to_dict(self) -> dict:
        """Return the fillable attributes plus id and owner."""
        data = {'id': self.id, 'user_id': self.user_id}
        for name in self.FILLABLE:
            data[name] = getattr(self, name)
        return data

    def __repr__(self):
        """String representation of the address."""
        return f"<Address(id={self.id}, user_id={self.user_id}, line1='{self.line1}', city='{self.city}')>"
