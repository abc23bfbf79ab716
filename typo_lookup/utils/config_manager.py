# config_manager.py - JSON config manager

import json
import os

from typo_lookup.utils.logger_utils import Log

DEFAULTS = {
    "max_distance": 2.0,       # search budget
    "expected_distance": 1.0,  # typical typo size fed to the probability model
    "min_probability": 0.0,
    "max_suggestions": 5,
    "cost_model": "keyboard",  # keyboard | unit
    "probability_model": "exponential",  # exponential | poisson
    "swap_cost": 0.5,
    "case_cost": 0.25,
    "shift_cost": 0.5,
    "max_char_cost": 2.0,
    "allow_swap": True,
    "workers": 4,
}


class Config:
    def __init__(self, path="typo_lookup.json", create=True):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load(create)

    def _load(self, create):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                Log().warning(f"[Config] ignoring unreadable {self.path}: {e}")
                return
            for k, v in loaded.items():
                if k in self.data:
                    self.data[k] = v
                else:
                    Log().warning(f"[Config] unknown option {k!r} in {self.path}")
        elif create:
            self.save()

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key):
        return self.data[key]

    def items(self):
        return self.data.items()

    def set(self, key, val):
        """Set an option, coercing to the default's type. Returns False for unknown keys."""
        if key not in self.data:
            return False
        kind = type(DEFAULTS[key])
        if kind is bool and isinstance(val, str):
            self.data[key] = val.strip().lower() in ("1", "true", "yes", "on")
        else:
            self.data[key] = kind(val)
        self.save()
        return True
