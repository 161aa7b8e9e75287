"""
Core utilities shared across the parish site.

This package hosts:
- configuration helpers (env vars, data directory, SMTP, admin hosts)
- cross-cutting services such as logging, the e-mail adapter, CSRF and
  rate limit helpers.

Routers and services depend on these primitives instead of reading
os.environ directly.
"""
