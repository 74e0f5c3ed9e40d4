# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - upload.py: Upload gateway backed by Supabase Storage
# - media.py: Per-user draft media (ephemeral references)
# - organizations.py: Organization CRUD and publishing
# - projects.py, offerings.py, clients.py, reviews.py: Child records
# - portfolio.py: Public, unauthenticated portfolio views
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import upload
from . import media
from . import organizations
from . import projects
from . import offerings
from . import clients
from . import reviews
from . import portfolio

__all__ = [
    "health",
    "upload",
    "media",
    "organizations",
    "projects",
    "offerings",
    "clients",
    "reviews",
    "portfolio",
]
