from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)

    make = Column(String(80), nullable=False)
    model = Column(String(80), nullable=False)
    year = Column(Integer, nullable=False)
    price_per_day = Column(Numeric(10, 2), nullable=False)

    # Fonte única de verdade para "pode ser alugado"
    is_available = Column(Boolean, nullable=False, default=True)
    # Sem FK: evita dependência circular cars <-> orders
    current_order_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    orders = relationship("Order", back_populates="car")
