"""
Domain models for the memo engine.

This package contains the core domain models that represent memos,
image attachments, calendar grids and the engine's error types.
"""

from memo_engine.domains.errors import *
from memo_engine.domains.memos import *
from memo_engine.domains.calendar import *
