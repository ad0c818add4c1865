"""SQLAlchemy models for tradejournal database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Trading account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    broker = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    trades = relationship("Trade", back_populates="account", cascade="all, delete-orphan")


class Trade(Base):
    """Trade model."""

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    symbol = Column(String, nullable=False)
    direction = Column(String(4), nullable=False)
    volume = Column(Numeric(18, 8), nullable=False, default=0)
    entry_price = Column(Numeric(18, 8), nullable=False, default=0)
    exit_price = Column(Numeric(18, 8), nullable=True)
    stop_loss = Column(Numeric(18, 8), nullable=True)
    take_profit = Column(Numeric(18, 8), nullable=True)
    profit_loss = Column(Numeric(18, 8), nullable=True)
    commission = Column(Numeric(18, 8), nullable=False, default=0)
    swap = Column(Numeric(18, 8), nullable=False, default=0)
    entry_time = Column(DateTime, nullable=False)
    exit_time = Column(DateTime, nullable=True)
    is_closed = Column(Boolean, default=False, nullable=False)
    notes = Column(String, nullable=True)
    tags = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Duplicate lookups filter on these columns
    __table_args__ = (
        Index("ix_trades_fingerprint", "account_id", "symbol", "entry_time"),
    )

    # Relationships
    account = relationship("Account", back_populates="trades")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # The folder watcher imports from its timer thread
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
