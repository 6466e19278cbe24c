from sqlalchemy import Column, DateTime, Integer, String

from app.infrastructure.database import Base

class OrderRecord(Base):
    __tablename__ = "orders"

    # Auto-incrementing key; also breaks ties between equal created_at values
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    customer_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    medicine = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, processing, completed, cancelled
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
