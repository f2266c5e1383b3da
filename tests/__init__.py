# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Task Store API:
# - test_models.py: Pydantic model validation
# - test_store.py: In-memory Store operations
# - test_persistence.py: JSON file save/load
# - test_guard.py: Locking and persist-after-mutate
# - test_config.py: Settings loading
# - test_api.py: End-to-end HTTP scenarios
#
# Run tests with: pytest
# =============================================================================
