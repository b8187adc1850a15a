from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from app.core.database import Base


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


ACTIVE_STATUSES = (OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.ACTIVE)
TERMINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.REJECTED)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)

    # Nulos depois de REJECTED (pedido desvinculado, mantido para auditoria)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True)
    car_id = Column(Integer, ForeignKey("cars.id", ondelete="SET NULL"), index=True, nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    status = Column(String, default=OrderStatus.PENDING.value, nullable=False)  # PENDING / PAID / ACTIVE / COMPLETED / REJECTED

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="orders")
    car = relationship("Car", back_populates="orders")

    def detach(self) -> None:
        """Remove os vínculos com carro e usuário; id, datas, preço, status e created_at ficam."""
        self.car = None
        self.user = None
        self.car_id = None
        self.user_id = None
