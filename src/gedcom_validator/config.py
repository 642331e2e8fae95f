import yaml
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_validator.yml"

class GPConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.pipeline = data.get("pipeline", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.validation = data.get("validation", {}) or {}
        self.listings = data.get("listings", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def reference_date(self):
        """Raw "now" override (``D MON YYYY``) or None for today."""
        return self.pipeline.get("reference_date") or None

    @property
    def disabled_rules(self):
        return set(self.validation.get("disabled_rules") or [])

def load_config(path=None) -> 'GPConfig':
    config_path = Path(path) if path else CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GPConfig(data)

_config_cache = None

def get_config() -> 'GPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
