from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging


log = logging.getLogger(__name__)

FORM_FIELDS = (("name", "Name"), ("price", "Price"), ("stock", "Stock"))


class ProductsView:
    def __init__(self, parent, app):
        self.app = app
        self.frame = ttk.Frame(parent)
        self.frame.pack(fill="both", expand=True)

        style = ttk.Style(self.frame)
        style.configure("ProductsCompact.Treeview", rowheight=24, font=("Segoe UI", 9))
        style.configure("ProductsCompact.Treeview.Heading", font=("Segoe UI", 9, "bold"))

        self.form_box = ttk.LabelFrame(self.frame, text="Add product")
        self.form_box.pack(fill="x", pady=8)

        self._row_ids = {}
        self._syncing = False
        self.vars: dict[str, tk.StringVar] = {}
        for col, (field, label) in enumerate(FORM_FIELDS):
            self.vars[field] = self._entry(self.form_box, field, label, col)

        btns = ttk.Frame(self.form_box)
        btns.grid(row=2, column=0, columnspan=len(FORM_FIELDS), sticky="w", padx=8, pady=(6, 8))

        self.submit_btn = ttk.Button(btns, text="Add", style="Big.TButton", command=self.on_submit)
        self.submit_btn.pack(side="left")
        ttk.Button(btns, text="Clear", command=self.on_clear).pack(side="left", padx=6)

        self.list_box = ttk.LabelFrame(self.frame, text="Products")
        self.list_box.pack(fill="both", expand=True, pady=8)

        self.loading_label = ttk.Label(self.list_box, text="Loading products...", anchor="center")

        self.tree_wrap = ttk.Frame(self.list_box)

        cols = ("id", "name", "id_type", "type", "cost", "price", "min", "stock")
        self.tree = ttk.Treeview(self.tree_wrap, columns=cols, show="headings", height=18, style="ProductsCompact.Treeview")
        heads = {
            "id": "ID", "name": "Name", "id_type": "Type ID", "type": "Type",
            "cost": "Cost", "price": "Price", "min": "Min stock", "stock": "Stock",
        }
        widths = {"id": 120, "name": 240, "id_type": 70, "type": 120, "cost": 90, "price": 90, "min": 80, "stock": 70}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="center")
        self.tree.bind("<Double-1>", self._on_double_click)

        vsb = ttk.Scrollbar(self.tree_wrap, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        self.tree_wrap.columnconfigure(0, weight=1)
        self.tree_wrap.rowconfigure(0, weight=1)

        actions = ttk.Frame(self.tree_wrap)
        actions.grid(row=1, column=0, columnspan=2, sticky="w", pady=(6, 0))
        ttk.Button(actions, text="Edit", command=self.on_edit).pack(side="left")
        ttk.Button(actions, text="Delete", command=self.on_delete).pack(side="left", padx=6)

        # App loads the products once the window is up, then calls refresh().
        self._show_loading(True)

    def _entry(self, parent, field, label, col):
        ttk.Label(parent, text=label).grid(row=0, column=col, sticky="w", padx=8, pady=(6, 0))
        var = tk.StringVar(parent)
        var.trace_add("write", lambda *_args, f=field: self._on_var_write(f))
        e = ttk.Entry(parent, width=22, textvariable=var)
        e.grid(row=1, column=col, sticky="ew", padx=8, pady=4)
        e.bind("<Return>", self._on_enter_submit)
        parent.columnconfigure(col, weight=1)
        return var

    def _show_loading(self, loading: bool):
        if loading:
            self.tree_wrap.pack_forget()
            self.loading_label.pack(fill="both", expand=True, padx=6, pady=20)
        else:
            self.loading_label.pack_forget()
            self.tree_wrap.pack(fill="both", expand=True, padx=6, pady=6)

    def _selected_id(self):
        selected = self.tree.selection()
        if not selected:
            raise ValueError("Select a product.")
        return self._row_ids[selected[0]]

    def _on_enter_submit(self, _event=None):
        self.on_submit()
        return "break"

    def _on_double_click(self, event):
        # Headings and empty space have no row.
        if not self.tree.identify_row(event.y):
            return
        self.on_edit()

    def _on_var_write(self, field: str):
        # Writes made by sync_form mirror the form, they are not user input.
        if self._syncing:
            return
        self.on_field_change(field, self.vars[field].get())

    # ---------- Handlers ----------
    def on_field_change(self, field: str, value: str):
        self.app.inventory.change_field(field, value)

    def on_submit(self):
        inventory = self.app.inventory
        editing = inventory.editing
        try:
            product = inventory.submit()
            if product is None:
                return
            verb = "updated" if editing else "added"
            self.app.toast(f"Product {verb} (ID {product.id}).", kind="success")
            self.refresh()
        except Exception as e:
            self.app.handle_error("Save product", e, "Failed to save product.")

    def on_edit(self):
        try:
            product_id = self._selected_id()
            product = self.app.inventory.find(product_id)
            if product is None:
                raise ValueError("Product not found.")
            self.app.inventory.start_edit(product)
            self.sync_form()
        except Exception as e:
            self.app.handle_error("Edit product", e, "Failed to edit product.")

    def on_delete(self):
        try:
            product_id = self._selected_id()
            confirmed = messagebox.askyesno(
                "Confirm delete",
                f"Delete product ID {product_id}?",
                parent=self.frame,
            )
            if not confirmed:
                return

            self.app.inventory.delete(product_id)
            self.app.toast("Product deleted.", kind="success")
            self.refresh()
        except Exception as e:
            self.app.handle_error("Delete product", e, "Failed to delete product.")

    def on_clear(self):
        self.app.inventory.clear_form()
        self.sync_form()

    # ---------- Rendering ----------
    def sync_form(self):
        inventory = self.app.inventory
        self._syncing = True
        try:
            for field, var in self.vars.items():
                value = inventory.form.get(field)
                var.set(str(value) if value else "")
        finally:
            self._syncing = False

        if inventory.editing:
            self.form_box.configure(text="Edit product")
            self.submit_btn.configure(text="Update")
        else:
            self.form_box.configure(text="Add product")
            self.submit_btn.configure(text="Add")

    def refresh(self):
        inventory = self.app.inventory
        self._show_loading(inventory.loading)
        if inventory.loading:
            return

        for item in self.tree.get_children():
            self.tree.delete(item)

        self._row_ids = {}
        for values in inventory.table_rows():
            iid = self.tree.insert("", "end", values=values)
            self._row_ids[iid] = values[0]

        self.sync_form()
