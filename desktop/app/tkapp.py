"""Tkinter desktop application for the vehicle expense tracker."""

from __future__ import annotations

import argparse
import tkinter as tk
from datetime import date
from decimal import Decimal, InvalidOperation
from tkinter import messagebox, ttk
from typing import Callable, Dict, Iterable, List, Optional

from vehicle_common.config import load_settings
from vehicle_common.exceptions import ValidationError
from vehicle_common.filtering import ExpenseFilter
from vehicle_common.logging_config import configure_logging
from vehicle_common.models import Expense, ExpenseType
from vehicle_common.services import ExpenseService
from vehicle_common.storage import Database
from vehicle_common.views import (
    ExpenseFormController,
    ExpenseTableController,
    Notice,
    OverviewController,
)


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
DANGER_BG = "#b91c1c"
CHART_BAR = "#0284c7"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"

ALL_TYPES = "all"


def sanitize_amount_input(raw: str) -> str:
    if raw is None:
        return ""
    cleaned = raw.replace(",", "").replace("$", "").strip()
    return cleaned


def format_amount_display(value: float | Decimal | str) -> str:
    if isinstance(value, (float, int, Decimal)):
        return f"${value:,.2f}"
    sanitized = sanitize_amount_input(value)
    if not sanitized:
        return ""
    try:
        amount = Decimal(sanitized)
    except InvalidOperation:
        return value.strip()
    return f"${amount:,.2f}"


def format_date_display(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def type_choices() -> List[str]:
    return [ALL_TYPES, *ExpenseType.values()]


class AddExpenseDialog(tk.Toplevel):
    """Modal dialog collecting a new expense."""

    def __init__(self, master: tk.Misc, controller: ExpenseFormController) -> None:
        super().__init__(master, bg=SECONDARY_BG, padx=16, pady=16)
        self.controller = controller
        self.title("Add New Expense")
        self.resizable(False, False)
        self.transient(master)

        values = controller.values
        self.amount_var = tk.StringVar(value=str(values["amount"]))
        self.type_var = tk.StringVar(value=str(values["type"]))
        self.date_var = tk.StringVar(value=str(values["date"]))
        self.description_var = tk.StringVar(value=str(values["description"]))

        self._build_form()
        self.protocol("WM_DELETE_WINDOW", self.cancel)
        self.grab_set()

    def _build_form(self) -> None:
        ttk.Label(
            self,
            text="Enter the details of your vehicle expense below.",
            style="FormLabel.TLabel",
        ).grid(row=0, column=0, sticky="w", pady=(0, 8))

        def add_field(label: str, widget: ttk.Widget, row: int) -> None:
            ttk.Label(self, text=label, style="FormLabel.TLabel").grid(
                column=0, row=row, sticky="w", pady=4
            )
            widget.grid(column=0, row=row + 1, sticky="ew", pady=(0, 8))

        amount_entry = ttk.Entry(self, textvariable=self.amount_var, style="App.TEntry")
        amount_entry.bind("<FocusOut>", self._handle_amount_focus_out)
        add_field("Amount", amount_entry, 1)

        type_combo = ttk.Combobox(
            self,
            textvariable=self.type_var,
            values=list(ExpenseType.values()),
            state="readonly",
            style="App.TCombobox",
        )
        add_field("Expense Type", type_combo, 3)
        add_field(
            "Date (YYYY-MM-DD)",
            ttk.Entry(self, textvariable=self.date_var, style="App.TEntry"),
            5,
        )
        add_field(
            "Description (Optional)",
            ttk.Entry(self, textvariable=self.description_var, style="App.TEntry", width=40),
            7,
        )
        ttk.Label(
            self,
            text="E.g., location, mileage, or other relevant information",
            style="FormLabel.TLabel",
        ).grid(row=9, column=0, sticky="w")

        button_row = ttk.Frame(self, style="Panel.TFrame")
        button_row.grid(column=0, row=10, sticky="e", pady=(12, 0))
        ttk.Button(
            button_row, text="Cancel", command=self.cancel, style="Secondary.TButton"
        ).grid(column=0, row=0, padx=4)
        self.save_button = ttk.Button(
            button_row, text="Save Expense", command=self.submit, style="Primary.TButton"
        )
        self.save_button.grid(column=1, row=0, padx=4)

    def submit(self) -> None:
        errors = self._validate()
        if errors:
            messagebox.showerror("Invalid Expense", "\n".join(errors), parent=self)
            return
        self.save_button.configure(state="disabled", text="Saving...")
        self.controller.submit(
            {
                "amount": sanitize_amount_input(self.amount_var.get()),
                "type": self.type_var.get(),
                "date": self.date_var.get().strip(),
                "description": self.description_var.get(),
            }
        )
        self.destroy()

    def cancel(self) -> None:
        self.controller.close()
        self.destroy()

    def _handle_amount_focus_out(self, _event: object) -> None:
        self.amount_var.set(sanitize_amount_input(format_amount_display(self.amount_var.get())))

    def _validate(self) -> List[str]:
        errors: List[str] = []
        amount_text = sanitize_amount_input(self.amount_var.get())
        try:
            if Decimal(amount_text) <= 0:
                errors.append("Amount must be a positive number.")
        except InvalidOperation:
            errors.append("Amount must be a positive number.")
        try:
            date.fromisoformat(self.date_var.get().strip())
        except ValueError:
            errors.append("Provide a valid date (YYYY-MM-DD).")
        return errors


class OverviewTab(ttk.Frame):
    """Totals per type and a bar chart by month or by day."""

    def __init__(self, master: tk.Misc, controller: OverviewController) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.controller = controller
        self.total_var = tk.StringVar(value=format_amount_display(0.0))
        self.metric_vars: Dict[str, tk.StringVar] = {}
        self.share_vars: Dict[str, tk.StringVar] = {}
        self.granularity_var = tk.StringVar(value=controller.granularity)
        self.type_var = tk.StringVar(value=ALL_TYPES)

        self._build_metrics()
        self._build_chart()
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

    def _build_metrics(self) -> None:
        summary = ttk.Frame(self, style="Summary.TFrame")
        summary.grid(row=0, column=0, sticky="ew", pady=(0, 12))

        def build_metric(column: int, label: str, var: tk.StringVar, note: tk.StringVar) -> None:
            container = ttk.Frame(summary, style="Metric.TFrame", padding=(16, 12))
            container.grid(row=0, column=column, sticky="ew", padx=6)
            summary.columnconfigure(column, weight=1)
            ttk.Label(container, text=label, style="MetricLabel.TLabel").grid(row=0, column=0, sticky="w")
            ttk.Label(container, textvariable=var, style="MetricValue.TLabel").grid(row=1, column=0, sticky="w")
            ttk.Label(container, textvariable=note, style="FormLabel.TLabel").grid(row=2, column=0, sticky="w")

        build_metric(0, "Total Expenses", self.total_var, tk.StringVar(value="All time vehicle expenses"))
        for column, member in enumerate(ExpenseType, start=1):
            self.metric_vars[member.value] = tk.StringVar(value=format_amount_display(0.0))
            self.share_vars[member.value] = tk.StringVar(value="0% of total expenses")
            build_metric(column, member.label, self.metric_vars[member.value], self.share_vars[member.value])

    def _build_chart(self) -> None:
        frame = ttk.LabelFrame(self, text="Expenses Over Time", style="Card.TLabelframe")
        frame.grid(row=1, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(1, weight=1)

        controls = ttk.Frame(frame, style="Panel.TFrame")
        controls.grid(row=0, column=0, sticky="ew", pady=(4, 8))
        for column, (value, label) in enumerate((("month", "Monthly"), ("day", "Daily"))):
            ttk.Radiobutton(
                controls,
                text=label,
                value=value,
                variable=self.granularity_var,
                command=self._handle_granularity,
            ).grid(row=0, column=column, padx=4)
        type_combo = ttk.Combobox(
            controls,
            textvariable=self.type_var,
            values=type_choices(),
            state="readonly",
            style="App.TCombobox",
            width=14,
        )
        type_combo.grid(row=0, column=2, padx=12)
        type_combo.bind("<<ComboboxSelected>>", lambda _event: self._handle_type())

        self.canvas = tk.Canvas(frame, bg=SECONDARY_BG, highlightthickness=0, height=300)
        self.canvas.grid(row=1, column=0, sticky="nsew")
        self.canvas.bind("<Configure>", lambda _event: self.draw_chart())

    def refresh(self) -> None:
        self.controller.load()
        summary = self.controller.summary()
        self.total_var.set(format_amount_display(summary.total))
        for member in ExpenseType:
            self.metric_vars[member.value].set(format_amount_display(summary.by_type[member.value]))
            self.share_vars[member.value].set(f"{summary.shares[member.value]:.1f}% of total expenses")
        self.draw_chart()

    def draw_chart(self) -> None:
        self.canvas.delete("all")
        points = self.controller.series()
        width = max(self.canvas.winfo_width(), 200)
        height = max(self.canvas.winfo_height(), 120)
        padding = 28
        peak = max((point.amount for point in points), default=0.0) or 1.0
        slot = (width - 2 * padding) / max(len(points), 1)
        bar_width = max(slot * 0.6, 2)
        for index, point in enumerate(points):
            x0 = padding + index * slot + (slot - bar_width) / 2
            bar_height = (height - 2 * padding) * point.amount / peak
            y1 = height - padding
            if point.amount > 0:
                self.canvas.create_rectangle(
                    x0, y1 - bar_height, x0 + bar_width, y1, fill=CHART_BAR, outline=""
                )
            self.canvas.create_text(
                x0 + bar_width / 2, y1 + 12, text=point.name, fill=TEXT_MUTED, font=("Segoe UI", 8)
            )

    def _handle_granularity(self) -> None:
        self.controller.granularity = self.granularity_var.get()
        self.draw_chart()

    def _handle_type(self) -> None:
        selected = self.type_var.get()
        self.controller.expense_type = None if selected == ALL_TYPES else selected
        self.draw_chart()


class ExpenseTableTab(ttk.Frame):
    """Filterable, sortable expense table with bulk and per-row actions."""

    def __init__(self, master: tk.Misc, controller: ExpenseTableController) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.controller = controller

        self.search_var = tk.StringVar()
        self.type_var = tk.StringVar(value=ALL_TYPES)
        self.start_var = tk.StringVar()
        self.end_var = tk.StringVar()
        self.min_amount_var = tk.StringVar()
        self.max_amount_var = tk.StringVar()
        self.selection_var = tk.StringVar()
        self._syncing_selection = False

        self._build_toolbar()
        self._build_filter_panel()
        self._build_selection_bar()
        self._build_table()
        self._build_row_menu()
        self.columnconfigure(0, weight=1)
        self.rowconfigure(3, weight=1)

    def _build_toolbar(self) -> None:
        toolbar = ttk.Frame(self, style="Panel.TFrame")
        toolbar.grid(row=0, column=0, sticky="ew", pady=(0, 8))
        toolbar.columnconfigure(0, weight=1)

        search_entry = ttk.Entry(toolbar, textvariable=self.search_var, style="App.TEntry")
        search_entry.grid(row=0, column=0, sticky="ew", padx=4)
        self.search_var.trace_add("write", lambda *_args: self.apply_filters())

        type_combo = ttk.Combobox(
            toolbar,
            textvariable=self.type_var,
            values=type_choices(),
            state="readonly",
            style="App.TCombobox",
            width=14,
        )
        type_combo.grid(row=0, column=1, padx=4)
        type_combo.bind("<<ComboboxSelected>>", lambda _event: self.apply_filters())

        ttk.Button(
            toolbar, text="Filters", command=self.toggle_filter_panel, style="Secondary.TButton"
        ).grid(row=0, column=2, padx=4)
        ttk.Button(
            toolbar, text="Select All", command=self.toggle_select_all, style="Secondary.TButton"
        ).grid(row=0, column=3, padx=4)

    def _build_filter_panel(self) -> None:
        self.filter_panel = ttk.LabelFrame(self, text="Filters", style="Card.TLabelframe")
        fields = (
            ("From (YYYY-MM-DD)", self.start_var),
            ("To (YYYY-MM-DD)", self.end_var),
            ("Min amount", self.min_amount_var),
            ("Max amount", self.max_amount_var),
        )
        for column, (label, var) in enumerate(fields):
            self.filter_panel.columnconfigure(column, weight=1)
            ttk.Label(self.filter_panel, text=label, style="FormLabel.TLabel").grid(
                row=0, column=column, sticky="w", padx=4
            )
            ttk.Entry(self.filter_panel, textvariable=var, style="App.TEntry").grid(
                row=1, column=column, sticky="ew", padx=4, pady=(0, 8)
            )
        buttons = ttk.Frame(self.filter_panel, style="Panel.TFrame")
        buttons.grid(row=2, column=0, columnspan=len(fields), sticky="e")
        ttk.Button(buttons, text="Clear", command=self.clear_filters, style="Secondary.TButton").grid(
            row=0, column=0, padx=4, pady=4
        )
        ttk.Button(buttons, text="Apply", command=self.apply_filters, style="Primary.TButton").grid(
            row=0, column=1, padx=4, pady=4
        )

    def _build_selection_bar(self) -> None:
        self.selection_bar = ttk.Frame(self, style="Metric.TFrame", padding=(8, 4))
        self.selection_bar.columnconfigure(0, weight=1)
        ttk.Label(self.selection_bar, textvariable=self.selection_var, style="MetricLabel.TLabel").grid(
            row=0, column=0, sticky="w"
        )
        ttk.Button(
            self.selection_bar, text="Duplicate", command=self.duplicate_selected, style="Secondary.TButton"
        ).grid(row=0, column=1, padx=4)
        ttk.Button(
            self.selection_bar, text="Delete", command=self.delete_selected, style="Danger.TButton"
        ).grid(row=0, column=2, padx=4)

    def _build_table(self) -> None:
        table_frame = ttk.Frame(self, style="Panel.TFrame")
        table_frame.grid(row=3, column=0, sticky="nsew")
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)

        columns = ("date", "type", "description", "amount")
        self.tree = ttk.Treeview(
            table_frame,
            columns=columns,
            show="headings",
            height=12,
            selectmode="extended",
            style="App.Treeview",
        )
        headings = {
            "date": "Date",
            "type": "Type",
            "description": "Description",
            "amount": "Amount",
        }
        for key, label in headings.items():
            width = 260 if key == "description" else 130
            anchor = "e" if key == "amount" else "w"
            self.tree.heading(key, text=label, anchor=anchor)
            self.tree.column(key, width=width, anchor=anchor)
        self.tree.heading("date", command=self.toggle_sort)

        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        self.tree.bind("<<TreeviewSelect>>", self._handle_tree_select)
        self.tree.bind("<Button-3>", self._show_row_menu)

        self.empty_label = ttk.Label(table_frame, text="No expenses found.", style="FormLabel.TLabel")

    def _build_row_menu(self) -> None:
        self.row_menu = tk.Menu(self, tearoff=0)
        self._menu_row: Optional[str] = None
        self.row_menu.add_command(label="Duplicate", command=lambda: self._run_row_action("duplicate"))
        self.row_menu.add_command(label="Edit", state="disabled")
        self.row_menu.add_separator()
        self.row_menu.add_command(label="Delete", command=lambda: self._run_row_action("delete"))

    # Rendering --------------------------------------------------------------
    def populate(self) -> None:
        self._syncing_selection = True
        try:
            self.tree.delete(*self.tree.get_children())
            rows = self.controller.visible_rows()
            for expense in rows:
                self.tree.insert("", "end", iid=expense.id, values=self._row_values(expense))
            visible = [expense_id for expense_id in self.controller.selected if self.tree.exists(expense_id)]
            self.tree.selection_set(visible)
        finally:
            self._syncing_selection = False
        arrow = "↑" if self.controller.sort_direction == "asc" else "↓"
        self.tree.heading("date", text=f"Date {arrow}")
        if rows:
            self.empty_label.grid_remove()
        else:
            self.empty_label.grid(row=1, column=0, pady=12)
        self._refresh_selection_bar()

    def refresh(self) -> None:
        self.controller.load()
        self.populate()

    @staticmethod
    def _row_values(expense: Expense) -> Iterable[str]:
        return (
            format_date_display(expense.date),
            expense.type.label,
            expense.description or "",
            format_amount_display(expense.amount),
        )

    def _refresh_selection_bar(self) -> None:
        count = len(self.controller.selected)
        if count:
            self.selection_var.set(f"{count} selected")
            self.selection_bar.grid(row=2, column=0, sticky="ew", pady=(0, 8))
        else:
            self.selection_bar.grid_remove()

    # Filters ----------------------------------------------------------------
    def apply_filters(self) -> None:
        try:
            criteria = ExpenseFilter.from_mapping(
                {
                    "search": self.search_var.get(),
                    "type": self.type_var.get(),
                    "start": self.start_var.get(),
                    "end": self.end_var.get(),
                    "min_amount": sanitize_amount_input(self.min_amount_var.get()),
                    "max_amount": sanitize_amount_input(self.max_amount_var.get()),
                }
            )
        except ValidationError as exc:
            messagebox.showerror("Invalid Filter", str(exc), parent=self)
            return
        self.controller.set_filter(criteria)
        self.populate()

    def clear_filters(self) -> None:
        for var in (self.start_var, self.end_var, self.min_amount_var, self.max_amount_var):
            var.set("")
        self.apply_filters()

    def toggle_filter_panel(self) -> None:
        self.controller.toggle_filters()
        if self.controller.filters_visible:
            self.filter_panel.grid(row=1, column=0, sticky="ew", pady=(0, 8))
        else:
            self.filter_panel.grid_remove()

    def toggle_sort(self) -> None:
        self.controller.toggle_sort()
        self.populate()

    # Selection and actions ----------------------------------------------------
    def _handle_tree_select(self, _event: object) -> None:
        if self._syncing_selection:
            return
        self.controller.set_selection(list(self.tree.selection()))
        self._refresh_selection_bar()

    def toggle_select_all(self) -> None:
        self.controller.toggle_select_all()
        self.populate()

    def duplicate_selected(self) -> None:
        if self.controller.duplicate_selected():
            self.populate()

    def delete_selected(self) -> None:
        if not self.controller.request_bulk_delete():
            messagebox.showinfo("No selection", "Please select an expense to delete.", parent=self)
            return
        confirm = messagebox.askyesno("Are you sure?", self.controller.delete_prompt(), parent=self)
        if not confirm:
            self.controller.cancel_bulk_delete()
            return
        if self.controller.confirm_bulk_delete():
            self.populate()

    def _show_row_menu(self, event: tk.Event) -> None:
        row_id = self.tree.identify_row(event.y)
        if not row_id:
            return
        self._menu_row = row_id
        try:
            self.row_menu.tk_popup(event.x_root, event.y_root)
        finally:
            self.row_menu.grab_release()

    def _run_row_action(self, action: str) -> None:
        row_id = self._menu_row
        if row_id is None:
            return
        handlers: Dict[str, Callable[[str], bool]] = {
            "duplicate": self.controller.duplicate_single,
            "delete": self.controller.delete_single,
        }
        if handlers[action](row_id):
            self.populate()


class VehicleExpenseApp(tk.Tk):
    """Main application window."""

    def __init__(self, service: ExpenseService) -> None:
        super().__init__()
        self.title("Vehicle Expense Tracker")
        self.geometry("1080x720")
        self.minsize(900, 600)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        self.service = service
        self.form = ExpenseFormController(service, self.show_notice)
        self.table = ExpenseTableController(service, self.show_notice)
        self.overview = OverviewController(service, self.show_notice)

        self._build_layout()
        self._unsubscribe = service.subscribe(self.refresh_all)
        self.protocol("WM_DELETE_WINDOW", self.close)
        self.refresh_all()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)
        style.configure("TRadiobutton", background=SECONDARY_BG, foreground=TEXT_PRIMARY)

        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("Card.TLabelframe", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Card.TLabelframe.Label", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Header.TFrame", background=PRIMARY_BG)
        style.configure("Summary.TFrame", background=SECONDARY_BG)
        style.configure("Metric.TFrame", background=SECONDARY_BG)

        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("MetricLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9, "bold"))
        style.configure("MetricValue.TLabel", background=SECONDARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 16, "bold"))

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "App.TCombobox",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            arrowcolor=TEXT_PRIMARY,
        )
        style.map("App.TCombobox", fieldbackground=[("readonly", SECONDARY_BG)])

        style.configure("Primary.TButton", background=ACCENT_BG, foreground=TEXT_PRIMARY, padding=(18, 6))
        style.map(
            "Primary.TButton",
            background=[("active", ACCENT_ACTIVE_BG)],
            foreground=[("disabled", TEXT_MUTED)],
        )
        style.configure("Secondary.TButton", background=SECONDARY_BG, foreground=TEXT_PRIMARY, padding=(14, 6))
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])
        style.configure("Danger.TButton", background=DANGER_BG, foreground=TEXT_PRIMARY, padding=(14, 6))

        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=28,
        )
        style.configure("App.Treeview.Heading", background=SECONDARY_BG, foreground=TEXT_MUTED, relief="flat")
        style.map(
            "App.Treeview",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

        style.configure("App.TNotebook", background=PRIMARY_BG, borderwidth=0)
        style.configure("App.TNotebook.Tab", background=SECONDARY_BG, foreground=TEXT_MUTED, padding=(16, 10))
        style.map(
            "App.TNotebook.Tab",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        header = ttk.Frame(self, padding=20, style="Header.TFrame")
        header.grid(row=0, column=0, sticky="ew")
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="Vehicle Expense Tracker", style="Header.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Button(header, text="Add Expense", command=self.open_add_dialog, style="Primary.TButton").grid(
            row=0, column=1, sticky="e"
        )

        notebook = ttk.Notebook(self, style="App.TNotebook")
        notebook.grid(row=1, column=0, sticky="nsew")

        self.overview_tab = OverviewTab(notebook, self.overview)
        self.table_tab = ExpenseTableTab(notebook, self.table)

        notebook.add(self.overview_tab, text="Overview", padding=4)
        notebook.add(self.table_tab, text="Expenses", padding=4)

    def open_add_dialog(self) -> None:
        if self.form.dialog_open:
            return
        self.form.open()
        dialog = AddExpenseDialog(self, self.form)
        self.wait_window(dialog)

    def show_notice(self, notice: Notice) -> None:
        if notice.destructive:
            messagebox.showerror(notice.title, notice.description, parent=self)
        else:
            messagebox.showinfo(notice.title, notice.description, parent=self)

    def refresh_all(self) -> None:
        self.table_tab.refresh()
        self.overview_tab.refresh()

    def close(self) -> None:
        self._unsubscribe()
        self.destroy()


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the vehicle expense tracker")
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL (default: $DATABASE_URL or sqlite:///vehicle_expenses.db)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = load_settings(args.database_url)
    configure_logging(settings.log_level)
    database = Database(settings.database_url, echo=settings.sql_echo)
    database.create_all()

    app = VehicleExpenseApp(ExpenseService(database))
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
