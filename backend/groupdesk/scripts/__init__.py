"""Operator scripts — standalone processes run outside the API server."""
