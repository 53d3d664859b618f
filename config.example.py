# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPAGE_APP_NAME": "App display name (default: taskpage).",
    "TASKPAGE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TASKPAGE_DATA_DIR": "Local data directory for logs (default: .local/taskpage).",
    # Parsing
    "TASKPAGE_PARSE_CACHE_SIZE": "How many parsed lines to keep memoized (default: 512).",
    # Editing
    "TASKPAGE_DATE_FORMAT": "Due date display format, day.js tokens (default: ddd, D MMM YYYY).",
    "TASKPAGE_EXTRA_BULLETS": "Extra single-character bullets that continue lists, e.g. '+'.",
}
