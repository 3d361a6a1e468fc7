import os, yaml
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict
import pytz
from dotenv import load_dotenv

from .store import STORAGE_KEY

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".."))

CONFIG_PATH = os.environ.get(
    "PLACEMENT_TRACKER_CONFIG",
    os.path.join(ROOT_DIR, "config.yaml")
)
DEFAULT_STORAGE_PATH = os.path.join(ROOT_DIR, "data", "local_storage.json")

load_dotenv()

@dataclass
class Settings:
    app: Dict[str, Any] = field(default_factory=dict)
    storage: Dict[str, Any] = field(default_factory=dict)

    @property
    def timezone(self):
        return pytz.timezone(self.app.get("timezone", "UTC"))

    @property
    def confirm_deletes(self) -> bool:
        return bool(self.app.get("confirm_deletes", True))

    @property
    def seed_examples(self) -> bool:
        return bool(self.app.get("seed_examples", True))

    @property
    def storage_path(self) -> str:
        env_path = os.environ.get("PLACEMENT_TRACKER_STORAGE")
        if env_path:
            return env_path
        # relative paths in config.yaml are taken from the repo root, like the default
        return os.path.join(ROOT_DIR, self.storage.get("path", DEFAULT_STORAGE_PATH))

    @property
    def storage_key(self) -> str:
        return self.storage.get("key", STORAGE_KEY)

    def now(self) -> datetime:
        return datetime.now(self.timezone)

    def today(self) -> date:
        return self.now().date()

def load_settings(path: str | None = None) -> Settings:
    path = path or os.environ.get("PLACEMENT_TRACKER_CONFIG", CONFIG_PATH)
    if not os.path.exists(path):
        return Settings()
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    # we have to ensure optional blocks exist
    cfg.setdefault("app", {})
    cfg.setdefault("storage", {})
    return Settings(app=cfg["app"] or {}, storage=cfg["storage"] or {})
