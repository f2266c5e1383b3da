# =============================================================================
# core/ - Storage Logic Package
# =============================================================================
# This package contains framework-agnostic storage logic:
# - models/: Pydantic schemas for tasks, users and the db snapshot
# - store.py: In-memory Store with upsert/lookup/delete operations
# - guard.py: Single lock around the Store, persist-after-mutate
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
