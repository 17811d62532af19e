"""SQLAlchemy ORM models for the bill store"""

from sqlalchemy import Column, String, Integer, Float, DateTime, Date, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class BillRecord(Base):
    """Trade bill with its receipt details"""

    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bill_date = Column(Date, nullable=False, index=True)
    bill_no = Column(Text, nullable=False, default="")
    party = Column(Text, nullable=False, default="", index=True)
    company_name = Column(Text, nullable=False, default="")
    net_amount = Column(Float, nullable=False, default=0.0)
    credit_days = Column(Integer, nullable=False, default=0)
    rec_date = Column(Date, nullable=True)
    rec_amount = Column(Float, nullable=False, default=0.0)
    interest_paid = Column(String(3), nullable=False, default="No")
    interest_rate = Column(Float, nullable=True)
    mobile = Column(Text, nullable=False, default="")
    cheque_number = Column(Text, nullable=False, default="")
    bank_name = Column(Text, nullable=False, default="")
    pes = Column(Text, nullable=False, default="")
    meter = Column(Text, nullable=False, default="")
    rate = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())
