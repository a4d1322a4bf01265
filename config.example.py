# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Put local values in .env (gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FOCUSBOARD_APP_NAME": "App display name (default: focusboard).",
    "FOCUSBOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "FOCUSBOARD_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Storage (gitignored)
    "FOCUSBOARD_DATA_DIR": "Local data directory for the store and the log (default: .local/focusboard).",
    "FOCUSBOARD_STORE_BACKEND": "sqlite (default) or memory (nothing is saved).",
    "FOCUSBOARD_STORE_PATH": "SQLite key-value store path (default: <data_dir>/store.sqlite3).",
    # Pomodoro
    "FOCUSBOARD_WORK_MINUTES": "Focus session length, 1-60 (default: 25).",
    "FOCUSBOARD_BREAK_MINUTES": "Break length, 1-30 (default: 5).",
    "FOCUSBOARD_TICK_SECONDS": "Seconds between countdown ticks (default: 1.0).",
}
