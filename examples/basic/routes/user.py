"""User collection."""

USERS = {"1": {"id": "1", "name": "Ada"}, "2": {"id": "2", "name": "Grace"}}


def GET(request):
    """List users."""
    return list(USERS.values())


def POST(request):
    """Create a user from the JSON body."""
    return {"message": "Creating user", "data": request.body}


def DELETE(request):
    """Delete every user."""
    return {"message": "Deleting user"}
