from __future__ import annotations

import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from datetime import date
import logging

from prodman.ui.views.products_view import ProductsView

log = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(
        self,
        inventory_service,
        reporting_service,
        api_url: str,
        logs_dir: str,
    ):
        super().__init__()
        self.title("Product Manager")
        self.geometry("1100x640")
        self.minsize(900, 520)

        self.inventory = inventory_service
        self.reporting = reporting_service

        self.api_url = api_url
        self.logs_dir = logs_dir

        # UI state
        self.status_var = tk.StringVar(value="")
        self._toast_after_id = None

        self._build_styles()
        self._build_topbar()

        main = ttk.Frame(self)
        main.pack(fill="both", expand=True, padx=12, pady=(0, 8))

        self.products_view = ProductsView(main, self)

        self._build_status_bar()

        # Let the window paint the loading state before the first request.
        self.after_idle(self.initial_load)

    def _build_styles(self):
        style = ttk.Style(self)
        try:
            style.configure("Big.TButton", padding=(14, 8))
            style.configure("Title.TLabel", font=("Segoe UI", 12, "bold"))
        except Exception as e:
            log.exception("UI style setup failed: %s", e)

    def _build_topbar(self):
        top = ttk.Frame(self)
        top.pack(fill="x", padx=12, pady=10)

        ttk.Label(top, text="Product management", style="Title.TLabel").pack(side="left")
        ttk.Button(top, text="Export to Excel", command=self.export_products).pack(side="right")
        ttk.Button(top, text="Refresh", command=self.refresh).pack(side="right", padx=10)
        ttk.Label(top, text=f"API: {self.api_url}").pack(side="right", padx=10)

    def _build_status_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"Logs: {self.logs_dir}").pack(side="right")

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            try:
                self.after_cancel(self._toast_after_id)
            except tk.TclError:
                pass
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, err: Exception, toast_text: str):
        log.error("%s: %s", title, err, exc_info=(type(err), err, err.__traceback__))
        messagebox.showerror(title, str(err), parent=self)
        self.toast(toast_text, kind="error")

    # ---------- Load ----------
    def initial_load(self):
        self.inventory.load()
        self.products_view.refresh()

    def refresh(self):
        self.inventory.loading = True
        self.products_view.refresh()
        self.update_idletasks()
        self.initial_load()
        self.toast("Refreshed.", kind="info", ms=1200)

    # ---------- Export ----------
    def export_products(self):
        path = filedialog.asksaveasfilename(
            title="Save products as",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialfile=f"products_{date.today().isoformat()}.xlsx",
        )
        if not path:
            return
        try:
            count = self.reporting.export_products_excel(path, self.inventory.products)
            self.toast(f"Exported {count} products.", kind="success")
        except Exception as e:
            self.handle_error("Export error", e, "Excel export failed.")
