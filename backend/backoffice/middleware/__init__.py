# backoffice/middleware/__init__.py
"""
HTTP middleware:
- rate_limit: global and login fixed-window limiters
- security_headers: hardening headers on every response
"""
