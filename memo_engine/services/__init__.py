"""
Service implementations for the memo engine.

These services implement the view-derivation interfaces defined in
memo_engine.interfaces.services together with the session-only state used
by the list and calendar screens.
"""

from memo_engine.services.search import *
from memo_engine.services.calendar import *
from memo_engine.services.highlight import *
from memo_engine.services.selection import *
from memo_engine.services.images import *
