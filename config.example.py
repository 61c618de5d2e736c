# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening the code.
"""

ENV_VARS = {
    # App / logging
    "TASK_TRACKER_APP_NAME": "App display name used in logs (default: task-tracker).",
    "TASK_TRACKER_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TASK_TRACKER_LOG_TO_FILE": "Write full DEBUG logs to <data_dir>/task_tracker.log (true/false, default: true).",
    # Paths (gitignored)
    "TASK_TRACKER_DATA_DIR": "Local data directory (default: .local/task_tracker).",
    "TASK_TRACKER_TASKS_PATH": "Task file (default: <data_dir>/tasks.json). Overridden by --file.",
}
