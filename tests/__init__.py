# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio Builder API:
# - test_media_*.py / test_conditional_uploader.py: conditional upload core
# - test_models.py: Unit tests for Pydantic model validation
# - test_services.py: Organization and child record services
# - test_auth.py: Access token verification
# - test_routers.py: API endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
