"""Utility modules for challenge_solver."""

from .json_extraction import extract_json_object, format_answer, parse_lenient_json, repair_json, round10
from .logger import configure_logging
from .request_queue import RequestQueue
from .retry import BackoffPolicy, with_retry

__all__ = [
    "BackoffPolicy",
    "RequestQueue",
    "configure_logging",
    "extract_json_object",
    "format_answer",
    "parse_lenient_json",
    "repair_json",
    "round10",
    "with_retry",
]
