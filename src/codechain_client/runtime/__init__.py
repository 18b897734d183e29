"""Runtime helpers for the CodeChain Python client"""

from .errors import *  # noqa: F401,F403
from .errors import __all__
