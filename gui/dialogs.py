import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional
from core.models import Block, BlockColor
from core.timefmt import format_time
from controller.app_controller import AppController
from gui.task_list import ScrollableTaskList


class BlockDialog(tk.Toplevel):
    """Task list of one block: create, edit, toggle, delete, save as template."""
    def __init__(self, parent, controller: AppController, block: Block,
                 on_changed: Optional[Callable[[], None]] = None):
        super().__init__(parent)
        self.title(block.title)
        self.geometry("720x420")
        self.transient(parent)
        self._on_changed = on_changed
        self.session = controller.open_block(block)

        header = ttk.Frame(self, padding=(8, 8))
        header.pack(fill="x")
        ttk.Label(header, text=block.title, font=("TkDefaultFont", 14, "bold")).pack(side="left")
        ttk.Button(header, text="Guardar en biblioteca", command=self._on_save_library).pack(side="right")

        body = ttk.Frame(self, padding=(8, 0, 8, 8))
        body.pack(fill="both", expand=True)

        self.task_list = ScrollableTaskList(
            body,
            on_toggle=self._on_toggle,
            on_edit=self._on_edit,
            on_delete=self._on_delete,
        )
        self.task_list.pack(side="left", fill="both", expand=True)

        form = ttk.Frame(body, padding=(12, 0, 0, 0))
        form.pack(side="right", fill="y")
        ttk.Label(form, text="Tarea").pack(anchor="w")
        self.title_entry = ttk.Entry(form, width=24)
        self.title_entry.pack(fill="x", pady=(0, 8))
        self.title_entry.bind("<Return>", self._on_submit)
        ttk.Label(form, text="Hora (HH:MM)").pack(anchor="w")
        self.time_entry = ttk.Entry(form, width=8)
        self.time_entry.pack(anchor="w", pady=(0, 8))
        self.time_entry.bind("<Return>", self._on_submit)
        self.submit_btn = ttk.Button(form, text="Crear", command=self._on_submit)
        self.submit_btn.pack(anchor="e")
        self.status_var = tk.StringVar(value="")
        ttk.Label(form, textvariable=self.status_var, foreground="#666666").pack(anchor="w", pady=(8, 0))

        self.refresh()

    def refresh(self):
        rows = []
        for t in self.session.tasks:
            tags = [(f"@{format_time(t.time)}", "#22C55E")] if t.time else []
            rows.append({"id": t.id, "text": t.title, "done": t.completed, "tags": tags})
        self.task_list.set_tasks(rows)

    def _changed(self):
        self.refresh()
        if self._on_changed:
            self._on_changed()

    def _clear_form(self):
        self.title_entry.delete(0, "end")
        self.time_entry.delete(0, "end")
        self.submit_btn.configure(text="Crear")

    # ---------- callbacks ----------
    def _on_submit(self, event=None):
        title, time = self.title_entry.get(), self.time_entry.get()
        if self.session.editing_task_id:
            done = self.session.update_task(title, time)
        else:
            done = self.session.add_task(title, time)
        if done:
            self._clear_form()
            self._changed()

    def _on_edit(self, task_id: str):
        task = self.session.begin_edit(task_id)
        if not task:
            return
        self._clear_form()
        self.title_entry.insert(0, task.title)
        self.time_entry.insert(0, task.time or "")
        self.submit_btn.configure(text="Actualizar")

    def _on_toggle(self, task_id: str):
        self.session.toggle_task(task_id)
        self._changed()

    def _on_delete(self, task_id: str):
        if self.session.delete_task(task_id):
            if not self.session.editing_task_id:
                self._clear_form()
            self._changed()

    def _on_save_library(self):
        if self.session.save_to_library():
            self.status_var.set("Guardado en biblioteca ✓")


class CreateBlockDialog(tk.Toplevel):
    """New block form plus the library of saved templates."""
    def __init__(self, parent, controller: AppController, on_created: Optional[Callable[[], None]] = None):
        super().__init__(parent)
        self.title("Nuevo bloque")
        self.geometry("360x460")
        self.transient(parent)
        self.controller = controller
        self._on_created = on_created

        frame = ttk.Frame(self, padding=12)
        frame.pack(fill="both", expand=True)

        self.name_entry = ttk.Entry(frame)
        self.name_entry.pack(fill="x")
        self.name_entry.bind("<Return>", self._on_create)
        self.color_var = tk.StringVar(value=BlockColor.RED.label)
        ttk.Combobox(frame, textvariable=self.color_var, state="readonly",
                     values=[c.label for c in BlockColor]).pack(fill="x", pady=(8, 0))

        ttk.Separator(frame).pack(fill="x", pady=12)
        ttk.Label(frame, text="Biblioteca", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")
        self.library_rows = ttk.Frame(frame)
        self.library_rows.pack(fill="both", expand=True, pady=(6, 0))

        buttons = ttk.Frame(frame)
        buttons.pack(fill="x", pady=(12, 0))
        ttk.Button(buttons, text="Crear", command=self._on_create).pack(side="right")
        ttk.Button(buttons, text="Cancelar", command=self.destroy).pack(side="right", padx=(0, 6))

        self.controller.load_library()
        self.render_library()
        self.name_entry.focus_set()

    def render_library(self):
        for child in self.library_rows.winfo_children():
            child.destroy()
        for lib in self.controller.library_blocks:
            row = tk.Frame(self.library_rows)
            row.pack(fill="x", pady=1)
            ttk.Button(row, text="✕", width=2,
                       command=lambda i=lib.id: self._on_delete_library(i)).pack(side="left", padx=(0, 6))
            label = tk.Label(row, text=lib.title, anchor="w", cursor="hand2")
            label.pack(side="left", fill="x", expand=True)
            label.bind("<Button-1>", lambda e, i=lib.id: self._on_create_from_library(i))
            hover = BlockColor.hex_for(lib.color)
            label.bind("<Enter>", lambda e, w=label, c=hover: w.configure(bg=c))
            label.bind("<Leave>", lambda e, w=label, c=label.cget("bg"): w.configure(bg=c))

    def _done(self):
        if self._on_created:
            self._on_created()
        self.destroy()

    def _on_create(self, event=None):
        if self.controller.create_block(self.name_entry.get(), self.color_var.get()):
            self._done()

    def _on_create_from_library(self, library_block_id: str):
        if self.controller.create_from_library(library_block_id):
            self._done()

    def _on_delete_library(self, library_block_id: str):
        if self.controller.delete_library_block(library_block_id):
            self.render_library()
