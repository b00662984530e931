# API Route Constants

# Base API
API_BASE = '/api'

# Event routes
EVENT_BASE = f'{API_BASE}/events'
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_UPDATE = f'{EVENT_BASE}/{{event_id}}'
EVENT_TICKETS = f'{EVENT_BASE}/{{event_id}}/tickets'

# Ticket routes
TICKET_BASE = f'{API_BASE}/tickets'
TICKET_PURCHASE = f'{TICKET_BASE}/purchase'
TICKET_MY_TICKETS = TICKET_BASE

# Dashboard routes
DASHBOARD_BASE = f'{API_BASE}/dashboard'
DASHBOARD_STATS = f'{DASHBOARD_BASE}/stats'

# System routes
HEALTH = '/health'
METRICS = '/metrics'

# Headers
IDEMPOTENCY_KEY_HEADER = 'Idempotency-Key'
