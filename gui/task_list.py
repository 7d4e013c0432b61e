"""
Scrollable task list widget for Tkinter
---------------------------------------
Renders each task as its own row (a Frame) inside a scrollable Canvas, with:
- a Checkbutton to mark completion
- the task text (wrapping/expand, click to edit)
- optional colored tags (labels), used for the "@1:30pm" time tag
- an edit (✎) and a delete (✕) button

The widget is view-only state. All changes go through the callbacks passed in
the constructor; the owner re-renders with `set_tasks()`.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import tkinter as tk
from tkinter import ttk


class TaskRow(ttk.Frame):
    """A single task row with checkbox, text, colored tags, and action buttons."""
    def __init__(
        self,
        master,
        task_id: str,
        text: str,
        done: bool = False,
        tags: Optional[List[Tuple[str, str]]] = None,  # [(label, hex_color)]
        on_toggle: Optional[Callable[[str], None]] = None,
        on_edit: Optional[Callable[[str], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        wrap: int = 420,
    ):
        super().__init__(master)
        self.task_id = task_id
        self._on_toggle = on_toggle
        self._on_edit = on_edit
        self._on_delete = on_delete
        self.var = tk.BooleanVar(value=done)

        self.columnconfigure(1, weight=1)

        self.chk = ttk.Checkbutton(self, variable=self.var, command=self._toggle)
        self.chk.grid(row=0, column=0, padx=(8, 6), pady=4, sticky="w")

        self.lbl = ttk.Label(self, text=text, wraplength=wrap, anchor="w", justify="left")
        self.lbl.grid(row=0, column=1, sticky="we")
        self.lbl.bind("<Button-1>", lambda e: self._edit())

        self.tag_container = ttk.Frame(self)
        self.tag_container.grid(row=0, column=2, sticky="e", padx=(6, 0))

        ttk.Button(self, text="✎", width=2, command=self._edit).grid(row=0, column=3, padx=(6, 2))
        ttk.Button(self, text="✕", width=2, command=self._delete).grid(row=0, column=4, padx=(0, 8))

        self._render_tags(tags or [])
        self._apply_done_style(done)

    def _render_tags(self, tags: List[Tuple[str, str]]):
        for label, color in tags:
            # tk.Label so the background color works without ttk style plumbing
            tk.Label(
                self.tag_container,
                text=label,
                bg=color,
                fg=ideal_text_color(color),
                padx=4,
                pady=2,
                borderwidth=0,
                relief="flat",
            ).pack(side="left", padx=(0, 6))

    def _apply_done_style(self, done: bool):
        self.lbl.configure(style="Task.Done.TLabel" if done else "Task.Normal.TLabel")

    def _toggle(self):
        self._apply_done_style(bool(self.var.get()))
        if self._on_toggle:
            self._on_toggle(self.task_id)

    def _edit(self):
        if self._on_edit:
            self._on_edit(self.task_id)

    def _delete(self):
        if self._on_delete:
            self._on_delete(self.task_id)


class ScrollableTaskList(ttk.Frame):
    """Canvas + interior Frame pattern with mousewheel support."""
    def __init__(
        self,
        master,
        on_toggle: Optional[Callable[[str], None]] = None,
        on_edit: Optional[Callable[[str], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        row_wrap: int = 420,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._on_toggle = on_toggle
        self._on_edit = on_edit
        self._on_delete = on_delete
        self._row_wrap = row_wrap
        self._rows: Dict[str, TaskRow] = {}

        style = ttk.Style(self)
        style.configure("Task.Normal.TLabel")
        style.configure("Task.Done.TLabel", foreground="#888888", font=("TkDefaultFont", 10, "overstrike"))

        self.canvas = tk.Canvas(self, highlightthickness=0)
        self.vbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=self.vbar.set)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.vbar.grid(row=0, column=1, sticky="ns")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self.interior = ttk.Frame(self.canvas)
        self.interior.columnconfigure(0, weight=1)
        self._win_id = self.canvas.create_window(0, 0, window=self.interior, anchor="nw")

        self.interior.bind("<Configure>", lambda e: self._update_scrollregion())
        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self.canvas.bind("<Enter>", lambda e: self._bind_mousewheel())
        self.canvas.bind("<Leave>", lambda e: self._unbind_mousewheel())

    def set_tasks(self, tasks: List[Dict]):
        """Replace all rows. Each dict: {'id', 'text', 'done', 'tags'}."""
        for row in self._rows.values():
            row.destroy()
        self._rows.clear()
        for i, task in enumerate(tasks):
            row = TaskRow(
                self.interior,
                task_id=task["id"],
                text=task.get("text", ""),
                done=task.get("done", False),
                tags=task.get("tags", []),
                on_toggle=self._on_toggle,
                on_edit=self._on_edit,
                on_delete=self._on_delete,
                wrap=self._row_wrap,
            )
            row.grid(row=i, column=0, sticky="we", padx=(8, 8), pady=(2, 2))
            self._rows[task["id"]] = row
        self._update_scrollregion()

    def _update_scrollregion(self):
        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _on_canvas_configure(self, event):
        # keep interior width synced to canvas for wrapping
        self.canvas.itemconfigure(self._win_id, width=event.width)
        for row in self._rows.values():
            row.lbl.configure(wraplength=max(event.width - 200, 100))

    def _bind_mousewheel(self):
        self.canvas.bind_all("<MouseWheel>", self._on_mousewheel_windows_mac)
        self.canvas.bind_all("<Button-4>", self._on_mousewheel_linux)
        self.canvas.bind_all("<Button-5>", self._on_mousewheel_linux)

    def _unbind_mousewheel(self):
        for seq in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self.canvas.unbind_all(seq)

    def _on_mousewheel_windows_mac(self, event):
        self.canvas.yview_scroll(int(-1 * (event.delta / 120)), "units")

    def _on_mousewheel_linux(self, event):
        self.canvas.yview_scroll(-1 if event.num == 4 else 1, "units")


def ideal_text_color(bg_hex: str) -> str:
    """Return black or white depending on background brightness."""
    bg_hex = bg_hex.strip().lstrip('#')
    if len(bg_hex) == 3:
        bg_hex = ''.join(c * 2 for c in bg_hex)
    try:
        r = int(bg_hex[0:2], 16)
        g = int(bg_hex[2:4], 16)
        b = int(bg_hex[4:6], 16)
    except ValueError:
        return "black"
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    return "black" if luminance > 186 else "white"
