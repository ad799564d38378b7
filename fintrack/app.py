import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox,
    QLineEdit, QPushButton, QMessageBox, QFileDialog, QSizePolicy,
    QDialog, QScrollArea, QTabWidget, QTableView, QHeaderView, QAbstractItemView,
)
from PyQt6.QtGui import QStandardItemModel, QFont
from PyQt6.QtCore import Qt, QTimer
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from . import config
from .aggregator import BudgetStatus, aggregate, signed_amount, transaction_totals
from .forms import (
    FormError,
    TRANSACTION_TYPE_LABELS,
    format_date_input,
    submit_budget,
    submit_transaction,
)
from .models import Budget, Transaction, TransactionType
from .repository import LedgerStore
from .style import (
    UI_FONT_FAMILY,
    UI_BASE_FONT_SIZE,
    UI_TITLE_FONT_SIZE,
    WINDOW_WIDTH,
    WINDOW_HEIGHT,
    CHART_HEIGHT,
    ACCENT_COLOR,
    TITLE_COLOR,
    CATEGORY_COLOR,
    INCOME_COLOR,
    EXPENSE_COLOR,
)
from .ui import BudgetCard, format_currency, make_item, make_label, render_line_chart

logger = logging.getLogger(__name__)

_SAVE_BUTTON_STYLE = (
    "QPushButton { background-color: %s; color: #fff; font-weight: bold; padding: 8px; border-radius: 5px; }"
    % CATEGORY_COLOR.name()
)
_ADD_BUTTON_STYLE = (
    "QPushButton { background-color: %s; color: #fff; font-size: 24px; border-radius: 25px; }"
    % ACCENT_COLOR.name()
)


def _show_form_error(parent: QWidget, error: FormError):
    QMessageBox.warning(parent, "Atenção", str(error))


class BudgetDialog(QDialog):
    def __init__(self, parent, category: str = "", amount: str = ""):
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Adicionar Orçamento")
        self.setMinimumWidth(320)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(make_label("Adicionar Orçamento", bold=True, size=UI_TITLE_FONT_SIZE, color=CATEGORY_COLOR))

        self.category_cb = QComboBox()
        self.category_cb.addItem("Selecione a Categoria", "")
        for name in config.BUDGET_CATEGORY_CHOICES:
            self.category_cb.addItem(name, name)
        if category:
            idx = self.category_cb.findData(category)
            if idx >= 0:
                self.category_cb.setCurrentIndex(idx)
        layout.addWidget(self.category_cb)

        self.amount_input = QLineEdit(amount)
        self.amount_input.setPlaceholderText("Valor Orçado")
        self.amount_input.setAlignment(Qt.AlignmentFlag.AlignRight)
        layout.addWidget(self.amount_input)

        save_btn = QPushButton("Salvar")
        save_btn.setStyleSheet(_SAVE_BUTTON_STYLE)
        save_btn.clicked.connect(self.accept)
        layout.addWidget(save_btn)

    def values(self) -> tuple[str, str]:
        return self.category_cb.currentData() or "", self.amount_input.text()


class TransactionDialog(QDialog):
    def __init__(self, parent):
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Adicionar Nova Transação")
        self.setMinimumWidth(340)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(make_label("Adicionar Nova Transação", bold=True, size=UI_TITLE_FONT_SIZE))

        self.date_input = QLineEdit()
        self.date_input.setPlaceholderText("Data (DD/MM/AAAA)")
        self.date_input.textEdited.connect(self._on_date_edited)
        layout.addWidget(self.date_input)

        self.description_input = QLineEdit()
        self.description_input.setPlaceholderText("Descrição")
        layout.addWidget(self.description_input)

        self.category_cb = QComboBox()
        self.category_cb.addItem("Selecione a Categoria", "")
        for name in config.CATEGORY_CHOICES:
            self.category_cb.addItem(name, name)
        layout.addWidget(self.category_cb)

        self.type_cb = QComboBox()
        self.type_cb.addItem("Selecione o Tipo", "")
        for tx_type, label in TRANSACTION_TYPE_LABELS.items():
            self.type_cb.addItem(label, tx_type.value)
        layout.addWidget(self.type_cb)

        self.amount_input = QLineEdit()
        self.amount_input.setPlaceholderText("Valor")
        self.amount_input.setAlignment(Qt.AlignmentFlag.AlignRight)
        layout.addWidget(self.amount_input)

        save_btn = QPushButton("Salvar")
        save_btn.setStyleSheet(_SAVE_BUTTON_STYLE)
        save_btn.clicked.connect(self.accept)
        layout.addWidget(save_btn)

    def _on_date_edited(self, text: str):
        formatted = format_date_input(text)
        if formatted != text:
            self.date_input.setText(formatted)

    def values(self) -> dict[str, str]:
        return {
            "description": self.description_input.text(),
            "amount_text": self.amount_input.text(),
            "date_text": self.date_input.text(),
            "category": self.category_cb.currentData() or "",
            "type_text": self.type_cb.currentData() or "",
        }


class BudgetsScreen(QWidget):
    def __init__(self, store: LedgerStore, parent=None):
        super().__init__(parent)
        self.store = store
        self.budgets: list[Budget] = []
        self.transactions: list[Transaction] = []
        self._loaded = False

        layout = QVBoxLayout(self)

        self.figure = Figure(figsize=(4.5, CHART_HEIGHT / 100), dpi=100)
        self.canvas = FigureCanvasQTAgg(self.figure)
        self.canvas.setFixedHeight(CHART_HEIGHT)
        self.canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        layout.addWidget(self.canvas)

        layout.addWidget(make_label("Orçamentos:", bold=True, size=UI_TITLE_FONT_SIZE, color=TITLE_COLOR))

        self.cards_host = QWidget()
        self.cards_layout = QVBoxLayout(self.cards_host)
        self.cards_layout.setContentsMargins(0, 0, 0, 0)
        self.cards_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.cards_host)
        layout.addWidget(scroll, stretch=1)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        self.add_btn = QPushButton("+")
        self.add_btn.setFixedSize(50, 50)
        self.add_btn.setStyleSheet(_ADD_BUTTON_STYLE)
        self.add_btn.clicked.connect(lambda: self.open_budget_dialog())
        buttons_layout.addWidget(self.add_btn)
        layout.addLayout(buttons_layout)

    def showEvent(self, event):
        super().showEvent(event)
        if not self._loaded:
            self._loaded = True
            # Wait for a real size before drawing the chart
            QTimer.singleShot(0, self.reload)

    def reload(self):
        self.budgets = self.store.load_budgets()
        self.transactions = self.store.load_transactions()
        self.refresh()

    def set_transactions(self, transactions: list[Transaction]):
        self.transactions = list(transactions)
        if self._loaded:
            self.refresh()

    def refresh(self):
        report = aggregate(self.budgets, self.transactions)
        render_line_chart(self.figure, report.chart)
        self.canvas.draw_idle()

        while self.cards_layout.count() > 1:
            item = self.cards_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for idx, status in enumerate(report.statuses):
            self.cards_layout.insertWidget(idx, BudgetCard(status, self._on_edit_requested))

    def _on_edit_requested(self, status: BudgetStatus):
        self.open_budget_dialog(status.category, f"{status.budget.budget_amount:.2f}")

    def open_budget_dialog(self, category: str = "", amount: str = ""):
        dialog = BudgetDialog(self, category, amount)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        category, amount_text = dialog.values()
        try:
            self.budgets = submit_budget(self.store, self.budgets, category, amount_text)
        except FormError as e:
            _show_form_error(self, e)
            return
        self.refresh()


class TransactionsScreen(QWidget):
    def __init__(self, store: LedgerStore, on_change=None, parent=None):
        super().__init__(parent)
        self.store = store
        self.on_change = on_change
        self.transactions: list[Transaction] = []
        self._loaded = False

        layout = QVBoxLayout(self)

        self.summary_label = make_label("", bold=True, color=TITLE_COLOR)
        layout.addWidget(self.summary_label)

        self.model = QStandardItemModel(0, 5)
        self.model.setHorizontalHeaderLabels(["Data", "Descrição", "Categoria", "Tipo", "Valor"])
        self.view = QTableView()
        self.view.setModel(self.model)
        self.view.setFont(QFont(UI_FONT_FAMILY, UI_BASE_FONT_SIZE))
        self.view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.view.setSelectionMode(QAbstractItemView.SelectionMode.NoSelection)
        self.view.verticalHeader().setVisible(False)
        header = self.view.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self.view, stretch=1)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        self.add_btn = QPushButton("+")
        self.add_btn.setFixedSize(50, 50)
        self.add_btn.setStyleSheet(_ADD_BUTTON_STYLE)
        self.add_btn.clicked.connect(self.open_transaction_dialog)
        buttons_layout.addWidget(self.add_btn)
        layout.addLayout(buttons_layout)

    def showEvent(self, event):
        super().showEvent(event)
        if not self._loaded:
            self._loaded = True
            self.reload()

    def reload(self):
        self.transactions = self.store.load_transactions()
        self.refresh()

    def refresh(self):
        self.model.removeRows(0, self.model.rowCount())
        for tx in self.transactions:
            color = INCOME_COLOR if tx.type is TransactionType.INCOME else EXPENSE_COLOR
            self.model.appendRow([
                make_item(tx.date),
                make_item(tx.description),
                make_item(tx.category),
                make_item(TRANSACTION_TYPE_LABELS[tx.type]),
                make_item(format_currency(signed_amount(tx), signed=True), color=color, align_right=True),
            ])
        totals = transaction_totals(self.transactions)
        self.summary_label.setText(
            f"Renda: {format_currency(totals.income)}   "
            f"Despesa: {format_currency(totals.expense)}   "
            f"Saldo: {format_currency(totals.net)}"
        )

    def open_transaction_dialog(self):
        dialog = TransactionDialog(self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return
        try:
            self.transactions = submit_transaction(self.store, self.transactions, **dialog.values())
        except FormError as e:
            _show_form_error(self, e)
            return
        self.refresh()
        if self.on_change is not None:
            self.on_change(self.transactions)


class MainWindow(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("FinTrack")
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)
        self.store = LedgerStore()

        layout = QVBoxLayout(self)

        control_layout = QHBoxLayout()
        self.select_store_btn = QPushButton("Select store")
        self.select_store_btn.clicked.connect(self.select_store)
        control_layout.addWidget(self.select_store_btn)
        self.store_label = QLabel()
        self.store_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        control_layout.addWidget(self.store_label, stretch=1)
        layout.addLayout(control_layout)

        self.budgets_screen = BudgetsScreen(self.store)
        self.transactions_screen = TransactionsScreen(self.store, on_change=self.budgets_screen.set_transactions)
        self.tabs = QTabWidget()
        self.tabs.addTab(self.budgets_screen, "Orçamentos")
        self.tabs.addTab(self.transactions_screen, "Transações")
        last_tab = config.load_last_tab()
        if 0 <= last_tab < self.tabs.count():
            self.tabs.setCurrentIndex(last_tab)
        self.tabs.currentChanged.connect(config.save_last_tab)
        layout.addWidget(self.tabs, stretch=1)

        self._set_store_label(self.store.path)

    def _set_store_label(self, path: Path | None):
        self.store_label.setText(f"Store: {path}" if path else "Store: --")
        self.store_label.setToolTip(str(path) if path else "")

    def select_store(self):
        file, _ = QFileDialog.getSaveFileName(
            self,
            "Select store",
            str(config.STORE_PATH),
            "SQLite (*.db)",
            options=QFileDialog.Option.DontConfirmOverwrite,
        )
        if not file:
            return
        config.STORE_PATH = Path(file)
        config.save_store_path(config.STORE_PATH)
        logger.info("Using store %s", config.STORE_PATH)
        self._set_store_label(config.STORE_PATH)
        self.budgets_screen.reload()
        self.transactions_screen.reload()


def main():
    logging.basicConfig(
        level=getattr(logging, config.load_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
