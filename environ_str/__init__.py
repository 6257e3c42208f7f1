"""Convert between ``environ`` strings and structured environment variables.

This package defines:
- models: EnvVar, ParseEnvVarError, ParseErrorKind
- codec: parse/format single entries and whitespace-separated blocks
- env_array: OCI config ``Env`` arrays, mappings and layering
"""

from .codec import (
    collect_environ,
    format_env_var,
    format_environ,
    parse_env_var,
    parse_environ,
)
from .env_array import (
    format_env_array,
    from_env_dict,
    merge_env,
    parse_env_array,
    to_env_dict,
)
from .models import EnvVar, ParseEnvVarError, ParseErrorKind

__all__ = [
    "EnvVar",
    "ParseEnvVarError",
    "ParseErrorKind",
    "parse_env_var",
    "format_env_var",
    "parse_environ",
    "collect_environ",
    "format_environ",
    "parse_env_array",
    "format_env_array",
    "to_env_dict",
    "from_env_dict",
    "merge_env",
]
