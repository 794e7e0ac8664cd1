from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Float
from sqlalchemy.orm import relationship
from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # not unique: lookups return the first match
    username = Column(String, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, default="operator", nullable=False)  # operator, management
    operator_id = Column(String, nullable=True)  # Only for operators


class ProductionEntry(Base):
    """One operator submission for a process/station/shift time"""
    __tablename__ = "production_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    operator_id = Column(String, nullable=False)  # Denormalized copy, e.g. "12275"
    process = Column(String, nullable=False, index=True)
    station = Column(String, nullable=False)
    time = Column(String, nullable=False)  # Shift checkpoint label
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    details = relationship(
        "ProductionDetail",
        back_populates="entry",
        order_by="ProductionDetail.id",
    )


class ProductionDetail(Base):
    """Model/quantity line item of an entry"""
    __tablename__ = "production_details"

    id = Column(Integer, primary_key=True, index=True)
    entry_id = Column(Integer, ForeignKey("production_entries.id"), nullable=False, index=True)
    model = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)  # Decimal quantities allowed, e.g. 15.5

    entry = relationship("ProductionEntry", back_populates="details")


class Instruction(Base):
    """Management directive targeted at a process/station scope"""
    __tablename__ = "instructions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)  # Sender
    type = Column(String, nullable=False)  # Increase output, Quality check, ...
    target_process = Column(String, nullable=False)  # Process name or "All Processes"
    target_station = Column(String, nullable=False)  # Station or "All Stations"
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
