"""Always fails, to show the 500 handling."""


def GET(request):
    """Raise on purpose."""
    raise RuntimeError("this route always fails")
