# Column limits shared by the ORM models and the request schemas

# PostgreSQL INTEGER; price, capacity, attendees and quantity all fit in it
MAX_INT = 2**31 - 1

ID_LENGTH = 36  # UUID7
USER_ID_LENGTH = 64
TEXT_LENGTH = 255  # titles, locations, buyer name and email
CATEGORY_LENGTH = 64
PHONE_LENGTH = 64
IDEMPOTENCY_KEY_LENGTH = 255
