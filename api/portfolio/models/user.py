"""User model."""

from sqlalchemy import TIMESTAMP, Column, Index, String, Text, func, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship

from portfolio.database import Base


class User(Base):
    """User account model."""

    __tablename__ = "users"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    name = Column(Text, nullable=False)
    email = Column(String, nullable=False)
    # Null for accounts created through an external identity provider
    password_hash = Column(Text)
    email_verified_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"))
    updated_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"), onupdate=func.now())

    __table_args__ = (
        Index("uq_users_email_lower", func.lower(email), unique=True),
    )

    profile = relationship("Profile", back_populates="owner", uselist=False, cascade="all, delete-orphan")
