"""Profile model holding the embedded portfolio entries."""

from sqlalchemy import (
    TIMESTAMP,
    Column,
    ForeignKey,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import relationship

from portfolio.database import Base


class Profile(Base):
    """
    A user's portfolio document.

    Education, experience and project entries are embedded as JSONB
    arrays rather than stored in their own tables. Exactly one profile
    exists per user, enforced by the unique ``created_by`` column.
    """

    __tablename__ = "profiles"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    created_by = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    name = Column(Text, nullable=False, server_default=text("''"))
    email = Column(Text, nullable=False, server_default=text("''"))
    bio = Column(Text, nullable=False, server_default=text("''"))
    location = Column(Text, nullable=False, server_default=text("''"))
    website = Column(Text, nullable=False, server_default=text("''"))
    github = Column(Text, nullable=False, server_default=text("''"))
    linkedin = Column(Text, nullable=False, server_default=text("''"))
    skills = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    education = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    experience = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    projects = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    created_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"))
    updated_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"), onupdate=func.now())

    owner = relationship("User", back_populates="profile")
