# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for data validation (camelCase on the wire)
# - services/: One service class per feature, thin calls into Supabase
#
# Services raise app.exceptions errors; they never build HTTP responses.
# =============================================================================
