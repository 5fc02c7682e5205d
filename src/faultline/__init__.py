"""faultline: attach context to in-flight failures and dispatch them to handlers.

Intermediate code attaches typed payloads to a failure with scope-bound
loaders; a handling site picks the first handler whose category and payload
requirements the failure satisfies.

Example:
    >>> from faultline import FileName, catch, dispatch, handler, on_error
    >>> def read_config(path):
    ...     with on_error(FileName(path)):
    ...         return parse(path)
    >>> dispatch(
    ...     lambda: read_config("app.yaml"),
    ...     handler(catch(OSError), FileName)(lambda e, name: f"cannot read {name}"),
    ...     lambda: "unknown failure",
    ... )
"""

from faultline.bridge import Result, exception_to_result, try_handle_some
from faultline.common import Errno, FileName, SourceLocation
from faultline.config import FaultlineConfig, get_config, load_config, set_config
from faultline.core.exceptions import (
    ConfigurationError,
    FaultlineError,
    FaultlineUsageError,
    MismatchError,
    ResultError,
    StructuralMisuseError,
)
from faultline.diagnostics import current_exception_diagnostic_information, diagnostic_information
from faultline.dispatch import (
    Catch,
    Handler,
    HandlerDispatcher,
    Match,
    Require,
    catch,
    dispatch,
    handler,
    match,
    try_catch,
)
from faultline.episodes import (
    Episode,
    EpisodeRegistry,
    ErrorId,
    PayloadStore,
    current_episode,
    current_error,
    current_id,
    get_registry,
    new_error,
)
from faultline.loaders import InfoLoader, on_error, preload
from faultline.raising import Fault, exception, raise_error
from faultline.retrieval import (
    NO_MATCH,
    Attempt,
    MatchResult,
    RetrievalCombinator,
    attempt,
    retrieve,
    unwrap,
)

__version__ = "0.3.0"

__all__ = [
    "NO_MATCH",
    "Attempt",
    "Catch",
    "ConfigurationError",
    "Episode",
    "EpisodeRegistry",
    "Errno",
    "ErrorId",
    "Fault",
    "FaultlineConfig",
    "FaultlineError",
    "FaultlineUsageError",
    "FileName",
    "Handler",
    "HandlerDispatcher",
    "InfoLoader",
    "Match",
    "MatchResult",
    "MismatchError",
    "PayloadStore",
    "Require",
    "Result",
    "ResultError",
    "RetrievalCombinator",
    "SourceLocation",
    "StructuralMisuseError",
    "__version__",
    "attempt",
    "catch",
    "current_episode",
    "current_error",
    "current_exception_diagnostic_information",
    "current_id",
    "diagnostic_information",
    "dispatch",
    "exception",
    "exception_to_result",
    "get_config",
    "get_registry",
    "handler",
    "load_config",
    "match",
    "new_error",
    "on_error",
    "preload",
    "raise_error",
    "retrieve",
    "set_config",
    "try_catch",
    "try_handle_some",
    "unwrap",
]
