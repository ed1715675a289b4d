"""API and admin console routers."""
