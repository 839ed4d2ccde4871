# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "DAYBOOK_APP_NAME": "App display name (default: daybook).",
    "DAYBOOK_LOG_LEVEL": "Log file level (default: INFO).",
    # Front-end
    "DAYBOOK_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Persistence
    "DAYBOOK_PERSIST_ENABLED": "Keep tasks on disk (true/false, default: true).",
    "DAYBOOK_DATA_DIR": "Local data directory (default: .local/daybook).",
    "DAYBOOK_STORAGE_PATH": "Key/value storage file (default: <data_dir>/local_storage.json).",
    "DAYBOOK_STORAGE_KEY": "Key holding the task list (default: todoTasks).",
}
