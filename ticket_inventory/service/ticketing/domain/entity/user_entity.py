from enum import Enum

import attrs


class UserRole(str, Enum):
    ATTENDEE = 'attendee'
    ORGANIZER = 'organizer'


@attrs.define
class UserEntity:
    """Authenticated principal resolved from the bearer token; never stored here"""

    id: str
    role: UserRole
    email: str = ''
    name: str = ''

    @property
    def is_attendee(self) -> bool:
        return self.role == UserRole.ATTENDEE

    @property
    def is_organizer(self) -> bool:
        return self.role == UserRole.ORGANIZER
