API_PREFIX = '/api'

SHOW_BASE = f'{API_PREFIX}/show'
BOOKING_BASE = f'{API_PREFIX}/booking'
USER_BASE = f'{API_PREFIX}/user'
ADMIN_BASE = f'{API_PREFIX}/admin'
WEBHOOK_BASE = f'{API_PREFIX}/webhook'
