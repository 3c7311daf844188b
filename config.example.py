# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: Todo App).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASKLIST_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory for logs and storage (default: .local/tasklist).",
    "TASKLIST_STORAGE_DB_PATH": "Key-value SQLite path (default: <data_dir>/storage.sqlite3).",
    # Persistence
    "TASKLIST_STORAGE_KEY": "Key holding the task list snapshot (default: my-todo).",
}
