import json
import logging
import os


DEFAULT_CONFIG = {
    'max_columns': 4,
    'reminder_minutes': [60, 30],
    'lookahead_days': 14,
    'min_duration_minutes': 15,
    'max_duration_minutes': 12 * 60,
}


def _config_path():
    base = os.path.join(os.path.expanduser('~'), '.kidscalendar')
    os.makedirs(base, exist_ok=True)
    return os.path.join(base, 'kidscalendar_config.json')


def load_config():
    """Lädt die Konfiguration; fehlende Schlüssel werden mit Defaults aufgefüllt."""
    cfg = dict(DEFAULT_CONFIG)
    path = _config_path()
    if not os.path.exists(path):
        return cfg
    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, ValueError) as e:
        logging.warning(f"Konfiguration {path} nicht lesbar, nutze Defaults: {e}")
        return cfg
    if isinstance(stored, dict):
        cfg.update(stored)
    return cfg


def save_config(cfg: dict):
    path = _config_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)


def get_setting(key: str):
    return load_config().get(key, DEFAULT_CONFIG.get(key))
