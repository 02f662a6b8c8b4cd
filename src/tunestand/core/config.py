"""
Configuration for Tunestand.
Contains all constants, settings, and global parameters.
"""

import os

# Project Information
PROJECT_NAME = "Tunestand"
PROJECT_VERSION = "1.0.0"
PROJECT_DESCRIPTION = "Single-artist music storefront - browse, search, and play the catalog"

# Hosted backend (Supabase-style REST service)
CATALOG_CONFIG = {
    "BASE_URL": os.getenv("SUPABASE_URL", "").rstrip("/"),
    "API_KEY": os.getenv("SUPABASE_ANON_KEY", ""),
    "REST_PATH": "/rest/v1",
    "AUTH_PATH": "/auth/v1",
    "SONGS_TABLE": "songs",
    "ALBUMS_TABLE": "albums",
    "LIKES_TABLE": "likes",
    "PLAY_COUNT_RPC": "increment_play_count",
    "RELATED_LIMIT": 5,
    "TIMEOUT": 30,
}

# Playback Configuration
PLAYBACK_CONFIG = {
    "COUNTER_WORKERS": 2,  # background threads for play-count updates
    "SEEK_STEP": 10,  # seconds
}

# Public site, used for share links
SITE_CONFIG = {
    "BASE_URL": os.getenv("TUNESTAND_SITE_URL", "http://localhost:3000").rstrip("/"),
}

# User Interface Configuration
UI_CONFIG = {
    "MAX_DISPLAY_RESULTS": 50,
}

# Error Messages
ERROR_MESSAGES = {
    "MISSING_BACKEND_URL": "SUPABASE_URL is not set.",
    "MISSING_BACKEND_KEY": "SUPABASE_ANON_KEY is not set.",
    "NO_RESULTS": "No results found.",
    "LOGIN_REQUIRED": "Sign in with --email and --password to use favorites.",
}

# Logging Configuration
LOGGING_CONFIG = {
    "LEVEL": os.getenv("TUNESTAND_LOG_LEVEL", "WARNING").upper(),
    "FORMAT": "%(levelname)s - %(name)s - %(message)s",
}

# API Limits
API_LIMITS = {
    "MAX_RETRIES": 2,
    "BACKOFF_FACTOR": 0.5,
}

# Default Values
DEFAULTS = {
    "ARTIST": "Unknown Artist",
    "TITLE": "Unknown Title",
    "ALBUM": "Singles",
    "DURATION": "--:--",
}

# Validation Rules
VALIDATION_RULES = {
    "MIN_YEAR": 1900,
    "MAX_YEAR": 2100,
    "MIN_QUERY_LENGTH": 1,
    "MAX_QUERY_LENGTH": 200,
    "MIN_EMAIL_LENGTH": 3,
    "MAX_EMAIL_LENGTH": 254,
}
