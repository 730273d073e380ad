"""Business logic services for the Gridrr application.

Services are plain functions over a SQLAlchemy session; submodules are
imported directly (``from gridrr.services import engagement``).
"""
