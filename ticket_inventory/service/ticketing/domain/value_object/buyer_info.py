from typing import Optional

import attrs

from ticket_inventory.platform.exception.exceptions import InputValidationError


@attrs.frozen
class BuyerInfo:
    """Contact details copied onto the ticket at purchase time, not a live reference"""

    name: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def create(cls, *, name: Optional[str], email: Optional[str], phone: Optional[str] = None):
        name = (name or '').strip()
        email = (email or '').strip()
        if not name:
            raise InputValidationError('Buyer name is required')
        if not email:
            raise InputValidationError('Buyer email is required')
        if '@' not in email:
            raise InputValidationError('Buyer email is not a valid address')
        return cls(name=name, email=email, phone=(phone or '').strip() or None)
