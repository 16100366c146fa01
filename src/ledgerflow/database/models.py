"""SQLAlchemy models for ledgerflow database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Client entity model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    tax_id = Column(String, nullable=True)
    industry = Column(String, nullable=True)
    custom_regulations = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    last_updated = Column(DateTime, default=_now, nullable=False)

    # Relationships
    lines = relationship(
        "LedgerLine",
        back_populates="client",
        cascade="all, delete-orphan",
        order_by="LedgerLine.position",
    )
    imported_files = relationship(
        "ImportedFile", back_populates="client", cascade="all, delete-orphan"
    )


class LedgerLine(Base):
    """Ledger line model; position keeps the line order of the set."""

    __tablename__ = "ledger_lines"

    id = Column(String(36), primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    code = Column(String, nullable=False, default="")
    name = Column(String, nullable=False)
    debit = Column(Numeric(18, 2), nullable=False)
    credit = Column(Numeric(18, 2), nullable=False)
    balance = Column(Numeric(18, 2), nullable=False)
    section = Column(String, nullable=False)
    category = Column(String, nullable=False)
    is_group = Column(Boolean, default=False, nullable=False)
    manual_override = Column(Boolean, default=False, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="lines")


class ImportedFile(Base):
    """Imported document history model."""

    __tablename__ = "imported_files"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    name = Column(String, nullable=False)
    mime_type = Column(String, nullable=False)
    line_count = Column(Integer, default=0, nullable=False)
    imported_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="imported_files")


class Setting(Base):
    """Application-wide key/value setting."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    SQLite connections wait up to 30 seconds for a write lock held by
    another thread or process instead of failing at once.
    """
    connect_args = {"timeout": 30} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
