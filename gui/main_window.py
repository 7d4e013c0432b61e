import tkinter as tk
from tkinter import ttk, messagebox as mb
import datetime as dt
from typing import Dict
from core.config import TOPMOST, WINDOW_GEOMETRY
from core.models import Block, BlockColor
from core.timefmt import format_time
from controller.app_controller import AppController
from gui.dialogs import BlockDialog, CreateBlockDialog

CARD_SIZE = 160


class MainWindow(tk.Tk):
    def __init__(self, controller: AppController):
        super().__init__()
        self.controller = controller
        self.title("Day Blocks")
        self.geometry(WINDOW_GEOMETRY)
        self.configure(padx=8, pady=8)
        if TOPMOST:
            self.attributes("-topmost", True)
        ttk.Style(self).configure("Task.Done.TLabel", foreground="#888888",
                                  font=("TkDefaultFont", 10, "overstrike"))

        # Top bar
        top = ttk.Frame(self)
        top.pack(fill="x", pady=(0, 6))
        ttk.Button(top, text="◀", width=3, command=lambda: self._shift_day(-1)).pack(side="left")
        self.date_var = tk.StringVar(value=controller.date_iso)
        date_entry = ttk.Entry(top, textvariable=self.date_var, width=12)
        date_entry.pack(side="left", padx=4)
        date_entry.bind("<Return>", self._on_date_entry)
        ttk.Button(top, text="▶", width=3, command=lambda: self._shift_day(1)).pack(side="left")
        ttk.Button(top, text="Hoy", command=lambda: self._go_to(dt.date.today())).pack(side="left", padx=(6, 0))
        ttk.Button(top, text="Sync", command=self._sync_all).pack(side="right")
        self.status_var = tk.StringVar(value="Listo")
        ttk.Label(top, textvariable=self.status_var).pack(side="left", padx=12)

        body = ttk.Frame(self)
        body.pack(fill="both", expand=True)

        self.logs = LogsPanel(body, controller)
        self.logs.pack(side="left", fill="y", padx=(0, 8))

        self.backlog = BacklogPanel(body, controller)
        self.backlog.pack(side="right", fill="y", padx=(8, 0))

        self.board = BlockBoard(body, controller, on_open=self._open_block, on_changed=self._render)
        self.board.pack(side="left", fill="both", expand=True)

        bottom = ttk.Frame(self)
        bottom.pack(fill="x", pady=(6, 0))
        ttk.Button(bottom, text="Crear bloque +", command=self._open_create).pack(side="right")

        self.bind("<F5>", lambda e: self._sync_all())
        self._sync_all()

    # ---------- navigation ----------
    def _go_to(self, date: dt.date):
        self.date_var.set(date.isoformat())
        self.controller.select_date(date)
        self._render()

    def _shift_day(self, days: int):
        self._go_to(self.controller.selected_date + dt.timedelta(days=days))

    def _on_date_entry(self, event=None):
        try:
            date = dt.date.fromisoformat(self.date_var.get().strip())
        except ValueError:
            mb.showerror("Fecha", "Usá el formato AAAA-MM-DD")
            self.date_var.set(self.controller.date_iso)
            return
        self._go_to(date)

    # ---------- sync ----------
    def _sync_all(self):
        total = self.controller.refresh()
        self._render()
        self.status_var.set(f"Sincronizado {dt.datetime.now().strftime('%H:%M:%S')} · {total} items")

    def _render(self):
        self.board.render()
        self.logs.render()
        self.backlog.render()

    # ---------- dialogs ----------
    def _open_block(self, block: Block):
        BlockDialog(self, self.controller, block, on_changed=self.logs.render)

    def _open_create(self):
        CreateBlockDialog(self, self.controller, on_created=self._render)


class BlockBoard(tk.Canvas):
    """Draggable block cards. Block x/y is the card's offset from the board center."""
    def __init__(self, parent, controller: AppController, on_open, on_changed):
        super().__init__(parent, background="#FAFAFA", highlightthickness=0)
        self.controller = controller
        self._on_open = on_open
        self._on_changed = on_changed
        self._drag: Dict = {}
        self.bind("<Configure>", lambda e: self.render())

    def _origin(self):
        return self.winfo_width() // 2, self.winfo_height() // 2

    def render(self):
        self.delete("all")
        cx, cy = self._origin()
        for block in self.controller.blocks:
            self._draw_card(block, cx + block.x - CARD_SIZE // 2, cy + block.y - CARD_SIZE // 2)

    def _draw_card(self, block: Block, left: int, top: int):
        tag = f"block:{block.id}"
        self.create_rectangle(left, top, left + CARD_SIZE, top + CARD_SIZE,
                              fill=BlockColor.hex_for(block.color), outline="#999999",
                              width=1, tags=(tag, "card"))
        self.create_text(left + CARD_SIZE // 2, top + CARD_SIZE // 2 - 10, text=block.title,
                         width=CARD_SIZE - 20, font=("TkDefaultFont", 11, "bold"), tags=(tag, "card"))
        delete_id = self.create_text(left + CARD_SIZE - 14, top + 12, text="✕", fill="#CC0000",
                                     tags=(tag,))
        open_id = self.create_text(left + CARD_SIZE // 2, top + CARD_SIZE // 2 + 24, text="Ver tareas",
                                   fill="#555555", tags=(tag,))
        self.tag_bind(delete_id, "<Button-1>", lambda e, b=block: self._delete(b))
        self.tag_bind(open_id, "<Button-1>", lambda e, b=block: self._on_open(b))
        for item in self.find_withtag(tag):
            if item in (delete_id, open_id):
                continue
            self.tag_bind(item, "<ButtonPress-1>", lambda e, b=block: self._start_drag(e, b))
            self.tag_bind(item, "<B1-Motion>", self._drag_motion)
            self.tag_bind(item, "<ButtonRelease-1>", self._stop_drag)

    # ---------- drag ----------
    def _start_drag(self, event, block: Block):
        self._drag = {"block": block, "x": event.x, "y": event.y, "dx": 0, "dy": 0}

    def _drag_motion(self, event):
        if not self._drag:
            return
        step_x, step_y = event.x - self._drag["x"], event.y - self._drag["y"]
        self.move(f"block:{self._drag['block'].id}", step_x, step_y)
        self._drag.update(x=event.x, y=event.y,
                          dx=self._drag["dx"] + step_x, dy=self._drag["dy"] + step_y)

    def _stop_drag(self, event):
        drag, self._drag = self._drag, {}
        if not drag or (drag["dx"] == 0 and drag["dy"] == 0):
            return
        block = drag["block"]
        self.controller.move_block(block.id, block.x + drag["dx"], block.y + drag["dy"])

    def _delete(self, block: Block):
        if not mb.askyesno("Borrar bloque", f"¿Borrar el bloque y sus tareas?\n\n{block.title}"):
            return
        self.controller.delete_block(block.id)
        self._on_changed()


class LogsPanel(ttk.LabelFrame):
    """Tasks with a clock time for the day's blocks, ordered by time."""
    def __init__(self, parent, controller: AppController):
        super().__init__(parent, text="Logs", padding=8, width=260)
        self.controller = controller
        self.rows = ttk.Frame(self)
        self.rows.pack(fill="both", expand=True)

    def render(self):
        for child in self.rows.winfo_children():
            child.destroy()
        for task in self.controller.timed_tasks:
            row = ttk.Frame(self.rows)
            row.pack(fill="x", anchor="w", pady=1)
            dot = BlockColor.hex_for(self.controller.block_color(task.block_id), default="#000000")
            tk.Label(row, text="●", fg=dot).pack(side="left")
            ttk.Label(row, text=f"{task.title} @{format_time(task.time)}",
                      style="Task.Done.TLabel" if task.completed else "TLabel").pack(side="left")


class BacklogPanel(ttk.LabelFrame):
    def __init__(self, parent, controller: AppController):
        super().__init__(parent, text="Backlog", padding=8, width=260)
        self.controller = controller
        self.rows = ttk.Frame(self)
        self.rows.pack(fill="both", expand=True)

        entry_row = ttk.Frame(self)
        entry_row.pack(fill="x", pady=(8, 0))
        self.entry = ttk.Entry(entry_row)
        self.entry.pack(side="left", fill="x", expand=True, padx=(0, 6))
        self.entry.bind("<Return>", self._on_add)
        ttk.Button(entry_row, text="Crear", command=self._on_add).pack(side="left")

    def render(self):
        for child in self.rows.winfo_children():
            child.destroy()
        for item in self.controller.backlog:
            row = ttk.Frame(self.rows)
            row.pack(fill="x", anchor="w", pady=1)
            ttk.Button(row, text="✕", width=2,
                       command=lambda i=item.id: self._on_delete(i)).pack(side="left", padx=(0, 6))
            ttk.Label(row, text=item.title).pack(side="left")

    def _on_add(self, event=None):
        if self.controller.add_backlog_item(self.entry.get()):
            self.entry.delete(0, "end")
            self.render()

    def _on_delete(self, item_id: str):
        if self.controller.delete_backlog_item(item_id):
            self.render()
