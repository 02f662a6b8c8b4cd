"""
Configuration validation utilities.
"""

import importlib
from typing import List, Tuple, Optional
from .config import (
    CATALOG_CONFIG,
    PLAYBACK_CONFIG,
    LOGGING_CONFIG,
    VALIDATION_RULES,
    ERROR_MESSAGES,
)
from .exceptions import ConfigurationError


def check_dependencies() -> Tuple[bool, List[str]]:
    """
    Check if all required dependencies are installed.
    
    Returns:
        Tuple of (all_installed, list_of_missing_dependencies)
    """
    required_packages = {
        "requests": "requests",
        "rich": "rich",
    }
    
    missing = []
    for module_name, package_name in required_packages.items():
        try:
            importlib.import_module(module_name)
        except ImportError:
            missing.append(package_name)
    
    return len(missing) == 0, missing


def validate_configuration() -> Tuple[bool, List[str]]:
    """
    Validate application configuration.
    
    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []
    
    deps_ok, missing_deps = check_dependencies()
    if not deps_ok:
        errors.append(
            f"Missing required dependencies: {', '.join(missing_deps)}. "
            f"Please install them with: pip install -e ."
        )
    
    if not CATALOG_CONFIG["BASE_URL"]:
        errors.append(ERROR_MESSAGES["MISSING_BACKEND_URL"])
    elif not CATALOG_CONFIG["BASE_URL"].startswith(("http://", "https://")):
        errors.append("SUPABASE_URL must start with http:// or https://")
    
    if not CATALOG_CONFIG["API_KEY"]:
        errors.append(ERROR_MESSAGES["MISSING_BACKEND_KEY"])
    
    if CATALOG_CONFIG["TIMEOUT"] < 1:
        errors.append("Catalog TIMEOUT must be >= 1")
    
    if CATALOG_CONFIG["RELATED_LIMIT"] < 0:
        errors.append("Catalog RELATED_LIMIT must be >= 0")
    
    if PLAYBACK_CONFIG["COUNTER_WORKERS"] < 1:
        errors.append("COUNTER_WORKERS must be >= 1")
    
    valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if LOGGING_CONFIG["LEVEL"] not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")
    
    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_raise():
    """
    Validate configuration and raise ConfigurationError if invalid.
    """
    is_valid, errors = validate_configuration()
    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)


def validate_user_input(field_name: str, value: str, max_length: Optional[int] = None) -> str:
    """
    Validate and sanitize user input.
    
    Args:
        field_name: Name of the field being validated (for error messages)
        value: Input value to validate
        max_length: Optional maximum length (uses VALIDATION_RULES if not provided)
        
    Returns:
        Validated and sanitized value
        
    Raises:
        ValueError: If input is invalid
    """
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    
    value = value.strip()
    
    min_length = VALIDATION_RULES.get(f"MIN_{field_name.upper()}_LENGTH", 1)
    if len(value) < min_length:
        raise ValueError(f"{field_name} must be at least {min_length} character(s) long")
    
    if max_length is None:
        max_length = VALIDATION_RULES.get(f"MAX_{field_name.upper()}_LENGTH", 500)
    
    if len(value) > max_length:
        # Truncate instead of raising error for better UX
        value = value[:max_length]
    
    return value


def validate_year(year: Optional[int]) -> Optional[int]:
    """
    Validate year value.
    
    Args:
        year: Year to validate
        
    Returns:
        Validated year or None if invalid
    """
    if year is None:
        return None
    
    min_year = VALIDATION_RULES.get("MIN_YEAR", 1900)
    max_year = VALIDATION_RULES.get("MAX_YEAR", 2100)
    
    if not (min_year <= year <= max_year):
        return None
    
    return year
