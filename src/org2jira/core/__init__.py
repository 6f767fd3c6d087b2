"""
Core module - Pure domain logic with no external dependencies.

This module contains:
- domain/: Duration codec, field accessor, sprint parser, request builder
- ports/: Abstract interfaces that adapters must implement
- exceptions: Centralized exception hierarchy
"""

from .domain import *
from .ports import *
from .exceptions import *
