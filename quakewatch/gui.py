"""
Tkinter main window for QuakeWatch.

Shows a date entry with Search / Search today buttons, a status line,
the event table and the live event count. All widgets are bound to the
observable state of a TableController; updates published from the
background poller arrive through a queue drained on the Tk main loop.
"""

import queue
import tkinter as tk
from tkinter import ttk

from quakewatch.config import WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT, UI_POLL_MS
from quakewatch.utils import format_timestamp

# (column id, heading, width)
COLUMNS = (
    ("magnitude", "Magnitude", 90),
    ("place", "Location", 260),
    ("time", "Time (UTC)", 160),
    ("type", "Type", 110),
    ("title", "Title", 340),
)


def event_row(event):
    """Table cell values for one event, in COLUMNS order."""
    return (
        event.magnitude,
        event.place or "",
        format_timestamp(event.timestamp_millis),
        event.type,
        event.title,
    )


class MainView:
    """Tkinter window bound to a TableController."""

    def __init__(self, controller, ui_queue, root=None):
        self.controller = controller
        self.ui_queue = ui_queue
        self._closed = False

        self.root = root or tk.Tk()
        self.root.title(WINDOW_TITLE)
        self.root.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self._build_ui()
        self._bind_controller()
        self._poll_queue()

    def _build_ui(self):
        pad = {"padx": 10, "pady": 4}

        # -- Search row --
        frm_search = ttk.Frame(self.root)
        frm_search.pack(fill="x", **pad)

        ttk.Label(frm_search, text="Start date").pack(side="left")
        self._date_var = tk.StringVar(value="")
        self._date_entry = ttk.Entry(frm_search, textvariable=self._date_var, width=14)
        self._date_entry.pack(side="left", padx=(6, 14))
        self._date_entry.bind("<Return>", lambda _event: self._on_search())

        ttk.Button(frm_search, text="Search",
                   command=self._on_search).pack(side="left", padx=5)
        ttk.Button(frm_search, text="Search today",
                   command=self._on_search_today).pack(side="left", padx=5)

        self._status_var = tk.StringVar(value=self.controller.table_status.get())
        ttk.Label(frm_search, textvariable=self._status_var).pack(side="left", padx=10)

        # -- Event table --
        frm_table = ttk.Frame(self.root)
        frm_table.pack(fill="both", expand=True, padx=10, pady=(4, 0))

        self._table = ttk.Treeview(frm_table, columns=[c[0] for c in COLUMNS],
                                   show="headings", selectmode="browse")
        for column, heading, width in COLUMNS:
            self._table.heading(column, text=heading, anchor="w")
            self._table.column(column, width=width, anchor="w", stretch=column != "magnitude")
        scrollbar = ttk.Scrollbar(frm_table, orient="vertical",
                                  command=self._table.yview)
        self._table.configure(yscrollcommand=scrollbar.set)
        self._table.pack(side="left", fill="both", expand=True)
        scrollbar.pack(side="right", fill="y")

        # -- Count --
        frm_count = ttk.Frame(self.root)
        frm_count.pack(fill="x", padx=20, pady=20)
        self._count_var = tk.StringVar(value=str(self.controller.earthquake_count.get()))
        ttk.Label(frm_count, textvariable=self._count_var).pack(side="right")
        ttk.Label(frm_count, text="Earthquake Count: ").pack(side="right")

    def _bind_controller(self):
        self.controller.table_status.subscribe(self._status_var.set)
        self.controller.earthquake_count.subscribe(lambda count: self._count_var.set(str(count)))
        self.controller.earthquake_data.subscribe(self._render_rows)
        self._render_rows(self.controller.earthquake_data.items())

    def _render_rows(self, events):
        self._table.delete(*self._table.get_children())
        for event in events:
            self._table.insert("", "end", values=event_row(event))

    def _poll_queue(self):
        """Run callbacks published by the poller; re-arms itself every UI_POLL_MS."""
        if self._closed:
            return
        try:
            while True:
                try:
                    callback = self.ui_queue.get_nowait()
                except queue.Empty:
                    break
                try:
                    callback()
                except Exception as e:
                    print(f"[GUI] Error applying update: {e!r}")
        finally:
            self.root.after(UI_POLL_MS, self._poll_queue)

    def _on_search(self):
        self.controller.search(self._date_var.get())

    def _on_search_today(self):
        self.controller.search_today()

    def _on_close(self):
        print("[GUI] Window closed, stopping poller")
        self._closed = True
        self.controller.stop()
        self.root.destroy()

    def table_rows(self):
        return [self._table.item(iid, "values") for iid in self._table.get_children()]

    def run(self):
        self.root.mainloop()
