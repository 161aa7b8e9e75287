"""
FastAPI routers for the public site, grouped by concern (pages, forms, api).

Each module exposes an ``APIRouter`` included by ``parish.app``; the shared
page chrome lives in ``layout``.
"""
