# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan (store loading), middleware, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Store guard and settings injection
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# storage to the core/ and lib/ packages.
# =============================================================================

__version__ = "1.0.0"
