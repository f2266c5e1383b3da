# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoint
# - tasks.py: Task CRUD endpoints
# - users.py: Registration and login endpoints
#
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import tasks
from . import users
