"""
auth — User authentication module.

Provides:
  • Signed session tokens (HMAC-SHA256, 7-day expiry)
  • Password hashing (bcrypt)
  • Register / Login flows and API routes
  • ``get_current_user_id`` FastAPI dependency (the bearer-token gate)
"""
