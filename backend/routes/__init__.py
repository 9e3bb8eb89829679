# =============================================================================
# HEALTH MONITOR BACKEND - ROUTES PACKAGE
# =============================================================================
"""API routers."""
