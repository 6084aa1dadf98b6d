"""Core domain types and logic."""

from .clock import Clock, FrozenClock, ParseError, SystemClock
from .config import ConfigurationError, RetentionOptions, SweepConfig, load_config
from .deployment import Application, Deployment, Node
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # clock
    "Clock",
    "FrozenClock",
    "ParseError",
    "SystemClock",
    # config
    "ConfigurationError",
    "RetentionOptions",
    "SweepConfig",
    "load_config",
    # deployment
    "Application",
    "Deployment",
    "Node",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
