"""
Configuration management package for File Ripper.

This package provides configuration parsing, validation, and template
generation for File Ripper.
"""

from ..errors import ConfigurationError
from .parser import (
    ConfigParser,
    ConfigParseResult,
    load_config,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'validate_config_file',
    'create_config_template'
]
