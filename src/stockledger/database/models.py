"""SQLAlchemy models for stockledger database."""

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


class Customer(Base):
    """Customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    pan_number = Column(String, unique=True, nullable=True)
    gst_number = Column(String, unique=True, nullable=True)
    aadhaar_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    bank_accounts = relationship("BankAccount", back_populates="customer")
    transactions = relationship("Transaction", back_populates="customer")


class BankAccount(Base):
    """Customer bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    account_holder_name = Column(String, nullable=False)
    bank_name = Column(String, nullable=False)
    account_number = Column(String, nullable=False)
    ifsc_code = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="bank_accounts")


class Transaction(Base):
    """Append-only ledger transaction model (stock delivery or payment)."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    kind = Column(String, nullable=False)
    occurred_at = Column(DateTime, nullable=False)
    # Stock fields
    quality_category = Column(String, nullable=True)
    quantity = Column(Numeric(14, 3), nullable=True)
    unit_rate = Column(Numeric(14, 2), nullable=True)
    # Payment fields
    payment_method = Column(String, nullable=True)
    payment_amount = Column(Numeric(14, 2), nullable=True)
    external_reference = Column(String, nullable=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (Index("ix_transactions_customer_occurred", "customer_id", "occurred_at"),)

    # Relationships
    customer = relationship("Customer", back_populates="transactions")
    bank_account = relationship("BankAccount")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
