from pathlib import Path
import sys
import configparser
import logging
from typing import Any

logger = logging.getLogger(__name__)


def _resolve_config_file() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent / "fintrack.ini"
    module_dir = Path(__file__).resolve().parent
    candidate = module_dir / "fintrack.ini"
    if candidate.exists():
        return candidate
    return module_dir.with_name("fintrack.ini")


CONFIG_FILE = _resolve_config_file()
DEFAULT_STORE_PATH = Path.home() / ".fintrack" / "fintrack.db"

BUDGETS_KEY = "budgets"
TRANSACTIONS_KEY = "transactions"

CATEGORY_CHOICES = [
    "Alimentação",
    "Renda Fixa",
    "Transporte",
    "Moradia",
    "Lazer",
    "Educação",
    "Saúde",
    "Utilidades",
    "Viagens",
    "Eventos",
    "Presentes",
    "Cuidados Pessoais",
    "Assinaturas",
    "Impostos",
    "Seguros",
]
# Income categories make no sense as a spending ceiling
BUDGET_CATEGORY_CHOICES = [c for c in CATEGORY_CHOICES if c != "Renda Fixa"]

MISSING_FIELDS_MESSAGE = "Por favor, preencha todos os campos."

STYLE_DEFAULTS: dict[str, Any] = {
    "ui_font_family": "Segoe UI",
    "ui_base_font_size": 10,
    "ui_title_font_size": 12,
    "window_width": 480,
    "window_height": 760,
    "chart_height": 220,
    "chart_line_color": "#0000FF",
    "accent_color": "#D4AF37",
    "title_color": "#284767",
    "category_color": "#376F7B",
    "exceeded_color": "#DF4822",
    "within_budget_color": "#2AAD40",
    "income_color": "#0000FF",
    "expense_color": "#FF0000",
    "currency_prefix": "R$",
}

_STYLE_INT_KEYS = {
    "ui_base_font_size",
    "ui_title_font_size",
    "window_width",
    "window_height",
    "chart_height",
}


def _load_cfg() -> configparser.ConfigParser:
    cfg = configparser.ConfigParser()
    if CONFIG_FILE.exists():
        cfg.read(CONFIG_FILE, encoding="utf-8")
    return cfg


def _save_cfg(cfg: configparser.ConfigParser) -> bool:
    try:
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            cfg.write(f)
    except OSError:
        # Settings stay in memory for this session
        logger.exception("Failed to write config file %s", CONFIG_FILE)
        return False
    return True


def load_store_path() -> Path:
    cfg = _load_cfg()
    store_path = cfg.get("app", "store_path", fallback=None)
    if store_path:
        return Path(store_path).expanduser()
    return DEFAULT_STORE_PATH


def save_store_path(path: Path | None) -> None:
    cfg = _load_cfg()
    if "app" not in cfg:
        cfg["app"] = {}
    if path:
        cfg["app"]["store_path"] = str(path)
    else:
        cfg["app"].pop("store_path", None)
    _save_cfg(cfg)


def load_log_level() -> str:
    cfg = _load_cfg()
    return cfg.get("app", "log_level", fallback="INFO").upper()


def load_last_tab() -> int:
    cfg = _load_cfg()
    try:
        return cfg.getint("app", "last_tab", fallback=0)
    except ValueError:
        return 0


def save_last_tab(index: int) -> None:
    cfg = _load_cfg()
    if "app" not in cfg:
        cfg["app"] = {}
    cfg["app"]["last_tab"] = str(index)
    _save_cfg(cfg)


def load_style_settings() -> dict[str, Any]:
    cfg = _load_cfg()
    updated = False
    if "style" not in cfg:
        cfg["style"] = {}
        updated = True
    section = cfg["style"]
    settings: dict[str, Any] = {}
    for key, default in STYLE_DEFAULTS.items():
        raw_value = section.get(key)
        if raw_value is None:
            section[key] = str(default)
            raw_value = str(default)
            updated = True
        try:
            if key in _STYLE_INT_KEYS:
                settings[key] = int(float(raw_value))
            else:
                settings[key] = raw_value
        except (TypeError, ValueError):
            # Fallback to default on invalid values
            settings[key] = default
            section[key] = str(default)
            updated = True
    if updated:
        _save_cfg(cfg)
    return settings


# Mutable global used by db.get_conn; always reference via config.STORE_PATH
STORE_PATH: Path = load_store_path()
