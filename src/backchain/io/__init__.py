"""Import definitions used for input/output, diagnostics, and user interfaces."""

from .logging import Context as Context
from .logging import LoggingContext as LoggingContext
from .logging import console as console
