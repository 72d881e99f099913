# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for the API token. This file should contain only safe overrides.
"""

# Example: stay on the demo service even with a token in .env
# OFFLINE_MODE = True

# Example: keep the task mirror somewhere else (tasks.sqlite3 lives inside it)
# from pathlib import Path
# DATA_DIR = Path(".local/taskline-dev")
