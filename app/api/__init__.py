"""API blueprints.

The server registers no application routes. Only the operational endpoints in
this package are mounted, at the root of the URL space.
"""
