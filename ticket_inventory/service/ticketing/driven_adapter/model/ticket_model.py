from datetime import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from ticket_inventory.platform.constant.column_limit import (
    ID_LENGTH,
    IDEMPOTENCY_KEY_LENGTH,
    PHONE_LENGTH,
    TEXT_LENGTH,
    USER_ID_LENGTH,
)
from ticket_inventory.platform.database.orm_db_setting import Base


class TicketModel(Base):
    __tablename__ = 'ticket'
    __table_args__ = (
        UniqueConstraint('event_id', 'user_id', 'idempotency_key', name='uq_ticket_idempotency'),
        CheckConstraint('quantity >= 1', name='ck_ticket_quantity'),
        CheckConstraint('total_price >= 0', name='ck_ticket_total_price'),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)  # UUID7
    event_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey('event.id'), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # price * quantity of two INTEGER values needs 64 bits
    total_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    buyer_name: Mapped[str] = mapped_column(String(TEXT_LENGTH), nullable=False)
    buyer_email: Mapped[str] = mapped_column(String(TEXT_LENGTH), nullable=False)
    buyer_phone: Mapped[Optional[str]] = mapped_column(String(PHONE_LENGTH), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='confirmed')
    purchase_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    idempotency_key: Mapped[Optional[str]] = mapped_column(
        String(IDEMPOTENCY_KEY_LENGTH), nullable=True
    )
