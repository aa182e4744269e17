"""
Models Package

This file ensures all SQLAlchemy models are imported and registered
before tables are created.
"""

from models.base import Base
from models.order import OrderDocument
