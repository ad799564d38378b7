from PyQt6.QtGui import QColor

from .config import load_style_settings

_STYLE = load_style_settings()

# Fonts
UI_FONT_FAMILY = _STYLE["ui_font_family"]
UI_BASE_FONT_SIZE = _STYLE["ui_base_font_size"]
UI_TITLE_FONT_SIZE = _STYLE["ui_title_font_size"]

# Window geometry
WINDOW_WIDTH = _STYLE["window_width"]
WINDOW_HEIGHT = _STYLE["window_height"]

# Chart settings
CHART_HEIGHT = _STYLE["chart_height"]
CHART_LINE_COLOR = _STYLE["chart_line_color"]

# Card and status colors
ACCENT_COLOR = QColor(_STYLE["accent_color"])
TITLE_COLOR = QColor(_STYLE["title_color"])
CATEGORY_COLOR = QColor(_STYLE["category_color"])
EXCEEDED_COLOR = QColor(_STYLE["exceeded_color"])
WITHIN_BUDGET_COLOR = QColor(_STYLE["within_budget_color"])
INCOME_COLOR = QColor(_STYLE["income_color"])
EXPENSE_COLOR = QColor(_STYLE["expense_color"])

CURRENCY_PREFIX = _STYLE["currency_prefix"]
