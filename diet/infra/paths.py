from pathlib import Path

from diet.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized table file names (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
PROFILES_FILE = 'profiles.json'
GOALS_FILE = 'goals.json'
DIET_PLANS_FILE = 'diet_plans.json'
HISTORY_FILE = 'user_history.json'

__all__ = ['DATA_DIR', 'PROFILES_FILE', 'GOALS_FILE', 'DIET_PLANS_FILE', 'HISTORY_FILE']
