# =============================================================================
# app/ - HTTP Layer
# =============================================================================
# FastAPI application for Aurum:
# - main.py: app factory, CORS, error envelope, router mounting
# - config.py: pydantic-settings configuration
# - auth/: Supabase JWT verification and /auth routes
# - routers/: one module per resource family
#
# Handlers stay thin and call into core.services.
# =============================================================================
