"""Admin-only endpoint, guarded by the API-key step."""


def GET(request):
    """Admin dashboard data."""
    return {"admin": True}
