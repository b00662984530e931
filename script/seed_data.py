#!/usr/bin/env python3
"""
Database Seed Script
Populate sample data for local development

Features:
1. Create Events - A handful of events owned by the sample organizer
2. Print Tokens - Bearer tokens for one organizer and one attendee

Notes:
- Users live in the identity provider; tokens here are minted with the local
  SECRET_KEY exactly as the provider would sign them
- Tables are created if missing (run `alembic upgrade head` for PostgreSQL)
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ticket_inventory.platform.config.di import container
from ticket_inventory.service.ticketing.app.command.create_event_use_case import (
    CreateEventUseCase,
)
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity, UserRole


SAMPLE_ORGANIZER = UserEntity(
    id='organizer-1', role=UserRole.ORGANIZER, email='o@t.com', name='init organizer'
)
SAMPLE_ATTENDEE = UserEntity(
    id='attendee-1', role=UserRole.ATTENDEE, email='a@t.com', name='init attendee'
)


@dataclass
class EventConfig:
    """Event seed configuration"""

    title: str
    category: str
    location: str
    days_from_now: int
    price: int
    capacity: int


SAMPLE_EVENTS = [
    EventConfig('Tech Innovation Summit', 'Technology', 'San Francisco', 30, 299, 500),
    EventConfig('Jazz Night', 'Music', 'New Orleans', 14, 45, 120),
    EventConfig('Startup Pitch Day', 'Business', 'Berlin', 60, 0, 200),
    EventConfig('Sold Out Soon', 'Music', 'Taipei Arena', 7, 80, 2),
]


async def create_events(use_case: CreateEventUseCase) -> None:
    print(f'🎫 Creating {len(SAMPLE_EVENTS)} events...')
    now = datetime.now(timezone.utc)

    for config in SAMPLE_EVENTS:
        event = await use_case.create_event(
            organizer_id=SAMPLE_ORGANIZER.id,
            title=config.title,
            description=f'{config.title} in {config.location}',
            location=config.location,
            category=config.category,
            starts_at=now + timedelta(days=config.days_from_now),
            price=config.price,
            capacity=config.capacity,
        )
        print(f'   ✅ Created event: ID={event.id}, Title={event.title}, Capacity={event.capacity}')


def print_tokens() -> None:
    jwt_auth = container.jwt_auth()
    print('📋 Bearer tokens:')
    for user in (SAMPLE_ORGANIZER, SAMPLE_ATTENDEE):
        print(f'   {user.role.value} ({user.id}): {jwt_auth.create_jwt_token(user)}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = container.database()
    try:
        await database.create_tables()
        await create_events(CreateEventUseCase(uow_factory=container.unit_of_work))
        print()
        print_tokens()
    finally:
        await database.dispose()

    print('=' * 50)
    print('🌱 Data seeding completed!')


if __name__ == '__main__':
    asyncio.run(main())
