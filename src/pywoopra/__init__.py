"""pywoopra - Server-side Python client for Woopra analytics tracking."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pywoopra")
except PackageNotFoundError:
    __version__ = "0+local"
from pywoopra._script import ScriptBuffer, ScriptSink
from pywoopra.client import WoopraTracker
from pywoopra.config import WoopraConfig
from pywoopra.exceptions import (
    WoopraConfigError,
    WoopraError,
    WoopraOptionError,
    WoopraTransportError,
)
from pywoopra.models import RequestContext, TrackedEvent
from pywoopra.state import DEFAULT_OPTIONS, ApplyResult

__all__ = [
    "__version__",
    "DEFAULT_OPTIONS",
    "ApplyResult",
    "RequestContext",
    "ScriptBuffer",
    "ScriptSink",
    "TrackedEvent",
    "WoopraConfig",
    "WoopraConfigError",
    "WoopraError",
    "WoopraOptionError",
    "WoopraTracker",
    "WoopraTransportError",
]
