"""Authenticated routers."""
