import os
from datetime import date

from placement_tracker import settings
from placement_tracker.store import STORAGE_KEY

def test_missing_config_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("PLACEMENT_TRACKER_STORAGE", raising=False)
    cfg = settings.load_settings(str(tmp_path / "missing.yaml"))
    assert cfg.timezone.zone == "UTC"
    assert cfg.confirm_deletes is True
    assert cfg.seed_examples is True
    assert cfg.storage_key == STORAGE_KEY
    assert cfg.storage_path == settings.DEFAULT_STORAGE_PATH
    assert isinstance(cfg.today(), date)

def test_yaml_values(tmp_path, monkeypatch):
    monkeypatch.delenv("PLACEMENT_TRACKER_STORAGE", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "app:\n"
        "  timezone: Asia/Kolkata\n"
        "  confirm_deletes: false\n"
        "  seed_examples: false\n"
        "storage:\n"
        "  path: /tmp/apps.json\n"
        "  key: myApps\n",
        encoding="utf-8",
    )
    cfg = settings.load_settings(str(path))
    assert cfg.timezone.zone == "Asia/Kolkata"
    assert cfg.confirm_deletes is False
    assert cfg.seed_examples is False
    assert cfg.storage_path == "/tmp/apps.json"
    assert cfg.storage_key == "myApps"

def test_empty_blocks(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("app:\nstorage:\n", encoding="utf-8")
    cfg = settings.load_settings(str(path))
    assert cfg.app == {}
    assert cfg.storage_key == STORAGE_KEY

def test_env_selects_config_and_storage(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text("app:\n  timezone: Europe/London\n", encoding="utf-8")
    monkeypatch.setenv("PLACEMENT_TRACKER_CONFIG", str(path))
    monkeypatch.setenv("PLACEMENT_TRACKER_STORAGE", str(tmp_path / "s.json"))
    cfg = settings.load_settings()
    assert cfg.timezone.zone == "Europe/London"
    assert cfg.storage_path == os.path.join(str(tmp_path), "s.json")

def test_relative_storage_path_is_anchored_at_repo_root(tmp_path, monkeypatch):
    monkeypatch.delenv("PLACEMENT_TRACKER_STORAGE", raising=False)
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "config.yaml"
    path.write_text("storage:\n  path: data/apps.json\n", encoding="utf-8")
    cfg = settings.load_settings(str(path))
    assert cfg.storage_path == os.path.join(settings.ROOT_DIR, "data", "apps.json")
    assert os.path.isabs(cfg.storage_path)

def test_now_is_in_configured_timezone(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("app:\n  timezone: Asia/Tokyo\n", encoding="utf-8")
    cfg = settings.load_settings(str(path))
    assert cfg.now().utcoffset().total_seconds() == 9 * 3600
    assert cfg.today() == cfg.now().date()
