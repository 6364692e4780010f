"""Configuration loading."""

import os

import yaml

DEFAULTS = {
    "template_dir": "templates",
    "output_dir": "output",
    "log_level": "INFO",
    "insert_mode": True,
    "row_range": "row",
    "col_range": "col",
    "sample_rows": 30,
    "sample_cols": 20,
}


def load_config(config_path=None):
    """Load configuration from a YAML file, merged over :data:`DEFAULTS`."""
    config = dict(DEFAULTS)
    if config_path and os.path.exists(config_path):
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f) or {}
        config.update(user_config)
    return config
