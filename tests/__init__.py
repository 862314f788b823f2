# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Aurum API:
# - test_models.py: Pydantic model validation
# - test_aggregations.py / test_task_board.py / test_fleet_reports.py /
#   test_wellness_stats.py: pure lib code
# - test_*_service.py: services against the in-memory Supabase fake (fakes.py)
# - test_routes.py / test_auth.py: HTTP layer through TestClient
#
# Run tests with: pytest
# =============================================================================
