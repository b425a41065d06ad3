"""Core domain types: results, errors, configuration, repository layout."""

from .config import Config, load_config, load_config_or_default
from .errors import ErrorCode, NotesError, exit_code_for
from .repo_root import RepoLayout, detect_repo_root
from .result import Err, Found, NotFound, Ok, Probe, ProbeFailed, Result

__all__ = [
    # config
    "Config",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    "NotesError",
    "exit_code_for",
    # repo root
    "RepoLayout",
    "detect_repo_root",
    # result
    "Err",
    "Found",
    "NotFound",
    "Ok",
    "Probe",
    "ProbeFailed",
    "Result",
]
