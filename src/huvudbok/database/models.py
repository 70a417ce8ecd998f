"""SQLAlchemy models for the huvudbok database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Company(Base):
    """Company settings (one row per database)."""

    __tablename__ = "company"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    org_number = Column(String, nullable=True)
    fiscal_year_start_month = Column(Integer, default=1, nullable=False)
    contact = Column(String, nullable=True)
    address = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    phone = Column(String, nullable=True)


class LedgerAccount(Base):
    """Chart-of-accounts entry."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    account_number = Column(String(4), unique=True, nullable=False)
    name = Column(String, nullable=False)
    vat_rate = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Verification(Base):
    """Journal entry header."""

    __tablename__ = "verifications"

    id = Column(Integer, primary_key=True)
    series = Column(String, nullable=False, default="A")
    number = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    reverses_id = Column(Integer, ForeignKey("verifications.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("series", "number", name="uq_verification_series_number"),)

    # Relationships
    rows = relationship(
        "VerificationRow",
        back_populates="verification",
        cascade="all, delete-orphan",
        order_by="VerificationRow.position",
    )


class VerificationRow(Base):
    """Debit or credit line of a verification."""

    __tablename__ = "verification_rows"

    id = Column(Integer, primary_key=True)
    verification_id = Column(Integer, ForeignKey("verifications.id"), nullable=False)
    position = Column(Integer, nullable=False)
    account_number = Column(String(4), nullable=False, index=True)
    description = Column(String, nullable=True)
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)

    # Relationships
    verification = relationship("Verification", back_populates="rows")


class Document(Base):
    """Status-bearing business document."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(14, 2), nullable=True)
    description = Column(String, nullable=True)
    status = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and the schema."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Monthly review reads run on worker threads
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
