"""Checks that prove output shards are a faithful split of one input log."""

from .balance import verify_log_sizes
from .content import verify_log_content
from .corruption import estimate_corruption
from .errors import (
    ContentMismatch,
    EmptyOrMissingInput,
    InvalidArgument,
    MissingByte,
    SizeMismatch,
    UnexpectedByte,
    VerificationError,
)
from .suite import build_config, run_verification

__all__ = [
    "verify_log_content",
    "estimate_corruption",
    "verify_log_sizes",
    "build_config",
    "run_verification",
    "VerificationError",
    "InvalidArgument",
    "ContentMismatch",
    "UnexpectedByte",
    "MissingByte",
    "SizeMismatch",
    "EmptyOrMissingInput",
]
