import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for orders"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    shop_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    clients = relationship("Client", back_populates="user", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    carrier = Column(String(50), default="other")  # SMS gateway carrier
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="clients")
    orders = relationship("Order", back_populates="client")


class Order(Base):
    """One shop transaction; garments, payment and timeline are stored as JSON documents"""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)

    description = Column(Text, nullable=True)
    # pending → in-progress → completed; any → archived (terminal)
    status = Column(String(50), default="pending", nullable=False, index=True)
    due_date = Column(String(32), nullable=False)  # YYYY-MM-DD, time optional

    garments = Column(JSON, nullable=False, default=list)
    payment_info = Column(JSON, nullable=True)
    event_info = Column(JSON, nullable=True)
    timeline = Column(JSON, nullable=False, default=list)  # append-only audit log

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="orders")
    client = relationship("Client", back_populates="orders")
