from PyQt6.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QLabel, QToolButton, QSizePolicy
from PyQt6.QtGui import QStandardItem, QFont, QBrush, QColor
from PyQt6.QtCore import Qt

from typing import Callable

from matplotlib.figure import Figure

from .aggregator import BudgetStatus, ChartSeries
from .style import (
    UI_FONT_FAMILY,
    UI_BASE_FONT_SIZE,
    ACCENT_COLOR,
    TITLE_COLOR,
    CATEGORY_COLOR,
    EXCEEDED_COLOR,
    WITHIN_BUDGET_COLOR,
    CHART_LINE_COLOR,
    CURRENCY_PREFIX,
)


def format_currency(value: float, signed: bool = False) -> str:
    text = f"{CURRENCY_PREFIX} {abs(value):.2f}"
    if signed:
        return f"+ {text}" if value >= 0 else f"- {text}"
    return text if value >= 0 else f"-{text}"


def make_item(text="", bold=False, color=None, align_right=False):
    item = QStandardItem(str(text))
    item.setEditable(False)
    font = QFont(UI_FONT_FAMILY, UI_BASE_FONT_SIZE)
    if bold:
        font.setBold(True)
    item.setFont(font)
    if color:
        item.setForeground(QBrush(color))
    if align_right:
        item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
    else:
        item.setTextAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
    return item


def make_label(text="", bold=False, size=UI_BASE_FONT_SIZE, color: QColor | None = None) -> QLabel:
    label = QLabel(str(text))
    font = QFont(UI_FONT_FAMILY, size)
    font.setBold(bold)
    label.setFont(font)
    if color is not None:
        label.setStyleSheet(f"color: {color.name()};")
    return label


class BudgetCard(QFrame):
    """One budget with its budgeted and spent amounts and an edit button."""

    def __init__(self, status: BudgetStatus, on_edit: Callable[[BudgetStatus], None], parent=None):
        super().__init__(parent)
        self.status = status
        self.setObjectName("budgetCard")
        self.setStyleSheet(
            "#budgetCard { border: 1px solid %s; border-radius: 10px; background-color: #ffffff; }"
            % ACCENT_COLOR.name()
        )
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Maximum)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 8, 10, 8)
        text_layout = QVBoxLayout()
        text_layout.setSpacing(2)
        text_layout.addWidget(make_label(status.category, bold=True, color=CATEGORY_COLOR))
        text_layout.addWidget(
            make_label(f"Valor Orçado: {format_currency(status.budget.budget_amount)}", color=TITLE_COLOR)
        )
        text_layout.addWidget(make_label(f"Valor Gasto: {format_currency(status.spent)}", color=TITLE_COLOR))
        self.status_label = make_label(
            "Excedido" if status.exceeded else "Dentro do Orçamento",
            bold=True,
            color=EXCEEDED_COLOR if status.exceeded else WITHIN_BUDGET_COLOR,
        )
        text_layout.addWidget(self.status_label)
        layout.addLayout(text_layout, stretch=1)

        edit_btn = QToolButton()
        edit_btn.setText("✎")
        edit_btn.setToolTip("Editar")
        edit_btn.setStyleSheet(
            "QToolButton { background-color: %s; color: #fff; border-radius: 12px; padding: 4px; }"
            % ACCENT_COLOR.name()
        )
        edit_btn.clicked.connect(lambda: on_edit(self.status))
        layout.addWidget(edit_btn, alignment=Qt.AlignmentFlag.AlignTop)


def render_line_chart(figure: Figure, series: ChartSeries, empty_text="Nenhum orçamento cadastrado"):
    figure.clear()
    ax = figure.add_subplot(111)
    ax.set_facecolor("#ffffff")

    if not series.values:
        figure.subplots_adjust(left=0.1, right=0.9, top=0.85, bottom=0.25)
        ax.axis("off")
        ax.text(0.5, 0.5, empty_text, ha="center", va="center", fontsize=9, color="#4b5563")
        return ax

    xs = list(range(len(series.values)))
    ax.plot(xs, series.values, color=CHART_LINE_COLOR, marker="o", linewidth=2, markersize=5)
    ax.set_xticks(xs)
    ax.set_xticklabels(series.labels, rotation=45, ha="right", fontsize=8, color=CHART_LINE_COLOR)
    ax.tick_params(axis="y", labelsize=8, colors=CHART_LINE_COLOR)
    ax.yaxis.set_major_formatter(lambda v, _pos: f"{CURRENCY_PREFIX} {v:,.2f}")
    ax.grid(axis="y", color="#e5e7eb", linestyle="--", linewidth=0.8, alpha=0.7)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.margins(x=0.05, y=0.2)
    figure.subplots_adjust(left=0.22, right=0.97, top=0.95, bottom=0.35)
    return ax
