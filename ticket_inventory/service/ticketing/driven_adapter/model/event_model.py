from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ticket_inventory.platform.constant.column_limit import (
    CATEGORY_LENGTH,
    ID_LENGTH,
    TEXT_LENGTH,
    USER_ID_LENGTH,
)
from ticket_inventory.platform.database.orm_db_setting import Base


class EventModel(Base):
    __tablename__ = 'event'
    __table_args__ = (
        # Backstop for the conditional increment; a violating write fails instead of overselling
        CheckConstraint('attendees >= 0 AND attendees <= capacity', name='ck_event_attendees'),
        CheckConstraint('capacity >= 0', name='ck_event_capacity'),
        CheckConstraint('price >= 0', name='ck_event_price'),
    )

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)  # UUID7
    organizer_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(TEXT_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default='')
    location: Mapped[str] = mapped_column(String(TEXT_LENGTH), nullable=False, default='')
    category: Mapped[str] = mapped_column(
        String(CATEGORY_LENGTH), nullable=False, default='', index=True
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    attendees: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default='0')
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='active')
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
