"""
API Routers Module

Available routers:
- auth: Login, OTP, logout, registration, password recovery
- tasks: Dashboard task endpoints
- users: User profile endpoints
- system: Health and logs
"""

__all__ = ["auth", "tasks", "users", "system"]
