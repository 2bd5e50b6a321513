"""Routing — filesystem route discovery and the route table.

Route modules are loaded once at startup; the table is frozen before
the first request is dispatched.
"""
