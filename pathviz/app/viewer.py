# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer: board editor + search playback

- Mouse:
    left click / drag -> paint the active tool onto the board
- Keyboard:
    [F]/[S]/[W]/[E]  -> tool: free / start / wall / end
    [SPACE]          -> run the selected algorithm
    [X]              -> cancel a running search
    [A]/[B]          -> select algorithm (A* / BFS)
    [G]              -> toggle diagonals
    [V]              -> toggle visualization
    [+]/[-]          -> steps/sec
    [C]              -> clear board
    [1]/[2]/[3]      -> load map
    [Q]/[ESC]        -> quit

Settings come from pathviz.core.config (PATHVIZ_* env vars, --key=value).
The search runs on a SearchWorker; this loop only drains its trace.
"""

# --- bootstrap import path so `from pathviz...` works when run as a script ---
import sys, logging
from collections import deque
from dataclasses import replace
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import Deque, Dict, List, Optional, Tuple
import pygame

from pathviz.app.playback import Playback
from pathviz.core.board import Board, load_map
from pathviz.core.config import RunConfig, resolve_config
from pathviz.core.errors import PathvizError
from pathviz.core.runner import SearchWorker
from pathviz.core.types import Algorithm, Cell, Coord, SearchOutcome

logger = logging.getLogger(__name__)

# ---------- Config ----------
MAP_DIR = _REPO_ROOT / "maps"
MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_corridors":  MAP_DIR / "02_corridors.json",
    "03_walled_end": MAP_DIR / "03_walled_end.json",
}
DEFAULT_BOARD = (60, 40)
PANEL_W = 380            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font
LOG_LINES = 5

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
ASPHALT_GRAY= (200,200,200)
WALL_DARK   = ( 30, 30, 36)
NEON_CYAN_A = (0,150,255,110)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

TOOL_KEYS = {
    pygame.K_f: Cell.FREE,
    pygame.K_s: Cell.START,
    pygame.K_w: Cell.WALL,
    pygame.K_e: Cell.END,
}


# ---------- Log capture (the panel shows the last few runner messages) ----------
class _PanelLogHandler(logging.Handler):
    def __init__(self, maxlen: int = LOG_LINES):
        super().__init__(level=logging.INFO)
        self.lines: Deque[str] = deque(maxlen=maxlen)

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))


# ---------- Panel button ----------
BUTTON_BG = {
    "idle":  (36, 40, 48, 220),
    "hover": (46, 50, 60, 230),
    "on":    (58, 86, 160, 235),
}
BUTTON_EDGE_ON = (120, 170, 255)


class UIButton:
    """Panel button; togglable ones keep an on/off state for the settings they mirror."""

    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.togglable = togglable
        self.hover = False
        self.active = False

    def set_active(self, value: bool):
        self.active = self.togglable and bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        state = "on" if self.active else "hover" if self.hover else "idle"
        plate = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(plate, BUTTON_BG[state], plate.get_rect(), border_radius=10)
        screen.blit(plate, self.rect.topleft)
        if self.active:
            pygame.draw.rect(screen, BUTTON_EDGE_ON, self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, TEXT_LIGHT)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        """True when the click landed on this button."""
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
            return False
        if (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos)):
            self.callback()
            return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, board: Board, config: RunConfig):
        pygame.init()

        self.board = board
        self.config = config
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        win_w = GRID_MARGIN*2 + board.width * 14 + PANEL_W
        win_h = max(GRID_MARGIN*2 + board.height * 14, 720)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Path Finding Visualizer")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.playback = Playback(config.steps_per_sec, show_visualization=config.record_trace)
        self.worker: Optional[SearchWorker] = None
        self.outcome: Optional[SearchOutcome] = None
        self.tool = Cell.WALL
        self.painting = False
        self.state = "Idle"
        self.selected_map_key = "custom"
        self.clock = pygame.time.Clock()

        self._log = _PanelLogHandler()
        self._log.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger("pathviz").addHandler(self._log)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // self.board.width, avail_h // self.board.height)))

        grid_plate_w = self.board.width * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.board.height * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        x = (pos[0] - ox) // self.cell_size
        y = (pos[1] - oy) // self.cell_size
        return (x, y) if self.board.in_bounds((x, y)) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._poll_worker()
            self.playback.tick()
            self._draw()
            self.clock.tick(60)

    def _quit(self):
        if self.worker is not None:
            self.worker.cancel()
        pygame.quit()
        sys.exit(0)

    # ---------- search ----------
    def _start_search(self):
        self._cancel_search()
        self.outcome = None
        try:
            self.worker = SearchWorker(self.board, self.config)
        except PathvizError as ex:
            self.state = f"Error: {ex}"
            self.playback.stop()
            return
        self.playback.show_visualization = self.config.record_trace
        self.playback.start(self.worker.trace)
        self.worker.start()
        self.state = "Running"

    def _cancel_search(self):
        if self.worker is not None and self.worker.is_alive():
            self.worker.cancel()
            self.worker.join(timeout=1.0)
            self.state = "Cancelled"
        self.worker = None

    def _poll_worker(self):
        w = self.worker
        if w is None or w.is_alive() or self.outcome is not None:
            return
        if w.outcome is not None:
            self.outcome = w.outcome
            self.playback.set_outcome(w.outcome)
            self.state = "Done" if w.outcome.found else "No path"
        elif w.error is not None:
            self.state = f"Error: {w.error}"
            self.worker = None

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                self._handle_mouse(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key in TOOL_KEYS:
            self.tool = TOOL_KEYS[key]
        elif key == pygame.K_SPACE:
            self._start_search()
        elif key == pygame.K_x:
            self._cancel_search()
        elif key == pygame.K_a:
            self._switch_algo(Algorithm.ASTAR)
        elif key == pygame.K_b:
            self._switch_algo(Algorithm.BFS)
        elif key == pygame.K_g:
            self._toggle_diagonals()
        elif key == pygame.K_v:
            self._toggle_visualization()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_c:
            self._clear()
        elif key == pygame.K_1:
            self._switch_map("01_open_field")
        elif key == pygame.K_2:
            self._switch_map("02_corridors")
        elif key == pygame.K_3:
            self._switch_map("03_walled_end")
        self._refresh_active_states()

    def _handle_mouse(self, e: pygame.event.Event):
        for b in self._buttons:
            if b.handle_mouse(e):
                return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self.painting = True
            self._paint(e.pos)
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self.painting = False
        elif e.type == pygame.MOUSEMOTION and self.painting:
            self._paint(e.pos)

    def _paint(self, pos: Tuple[int, int]):
        cell = self._cell_at(pos)
        if cell is None:
            return
        self.board.set_tile(self.tool, *cell)
        self.selected_map_key = "custom"

    # ---------- settings ----------
    def _switch_algo(self, algo: Algorithm):
        self.config = replace(self.config, algorithm=algo)
        self._refresh_active_states()

    def _toggle_diagonals(self):
        self.config = replace(self.config, use_diagonals=not self.config.use_diagonals)
        self._refresh_active_states()

    def _toggle_visualization(self):
        self.config = replace(self.config, record_trace=not self.config.record_trace)
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.playback.bump_speed(dv)
        self.config = replace(self.config, steps_per_sec=self.playback.steps_per_sec)

    def _clear(self):
        self._cancel_search()
        self.board.clear()
        self.playback.stop()
        self.outcome = None
        self.state = "Idle"
        self.selected_map_key = "custom"

    def _switch_map(self, key: str):
        if key not in MAP_FILES:
            return
        try:
            board = load_map(MAP_FILES[key])
        except (OSError, PathvizError) as ex:
            logger.error("Failed to load map %s: %s", key, ex)
            self.state = f"Error: {ex}"
            return
        self._cancel_search()
        self.board = board
        self.selected_map_key = key
        self.playback.stop()
        self.outcome = None
        self.state = "Idle"
        pygame.display.set_caption(f"Path Finding Visualizer: {key}")
        self._layout(*self.screen.get_size())

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, c: Coord) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return pygame.Rect(ox + c[0]*cs, oy + c[1]*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for y in range(self.board.height):
            for x in range(self.board.width):
                rect = self._cell_rect((x, y))
                v = self.board.cells[y][x]
                if v == Cell.WALL:
                    pygame.draw.rect(self.screen, WALL_DARK, rect)
                else:
                    pygame.draw.rect(self.screen, ASPHALT_GRAY, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays
        closed_tile = pygame.Surface((cs, cs), pygame.SRCALPHA); closed_tile.fill(NEON_MAG_A)
        open_tile   = pygame.Surface((cs, cs), pygame.SRCALPHA); open_tile.fill(NEON_CYAN_A)
        for c in self.playback.closed_cells:
            self.screen.blit(closed_tile, self._cell_rect(c).topleft)
        for c in self.playback.open_cells:
            self.screen.blit(open_tile, self._cell_rect(c).topleft)

        # path
        route = self.playback.path
        if len(route) >= 2:
            pts = [self._cell_rect(c).center for c in route]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 4))

        self._draw_badge(self.board.start, BLUE, "S")
        self._draw_badge(self.board.end, RED, "E")

    def _draw_badge(self, cell: Optional[Coord], color: Tuple[int,int,int], label: str):
        if cell is None:
            return
        rect = self._cell_rect(cell)
        pygame.draw.circle(self.screen, color, rect.center, max(3, self.cell_size//2 - 1))
        if self.cell_size >= 14:
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 330  # leaves space for the metrics card above
        w = max(160, rb.width - 32)
        h = 30
        gap = 6
        half = (w - 8) // 2

        def pair(left: UIButton, right: UIButton):
            self._buttons.append(left)
            self._buttons.append(right)

        self.btn_run = UIButton("Run", pygame.Rect(x, y, half, h), self._start_search)
        self.btn_cancel = UIButton("Cancel", pygame.Rect(x + half + 8, y, half, h), self._cancel_search)
        pair(self.btn_run, self.btn_cancel); y += h + gap

        self.btn_clear = UIButton("Clear board", pygame.Rect(x, y, w, h), self._clear)
        self._buttons.append(self.btn_clear); y += h + gap

        pair(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)),
             UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        self.btn_algo_a = UIButton("Algo: A*", pygame.Rect(x, y, half, h),
                                   lambda: self._switch_algo(Algorithm.ASTAR), togglable=True)
        self.btn_algo_b = UIButton("Algo: BFS", pygame.Rect(x + half + 8, y, half, h),
                                   lambda: self._switch_algo(Algorithm.BFS), togglable=True)
        pair(self.btn_algo_a, self.btn_algo_b); y += h + gap

        self.btn_diag = UIButton("Diagonals", pygame.Rect(x, y, half, h),
                                 self._toggle_diagonals, togglable=True)
        self.btn_viz = UIButton("Visualization", pygame.Rect(x + half + 8, y, half, h),
                                self._toggle_visualization, togglable=True)
        pair(self.btn_diag, self.btn_viz); y += h + gap

        self.btn_maps: Dict[str, UIButton] = {}
        for i, key in enumerate(MAP_FILES, start=1):
            btn = UIButton(f"Map {i}: {key[3:].replace('_', ' ')}", pygame.Rect(x, y, w, h),
                           lambda k=key: self._switch_map(k), togglable=True)
            self.btn_maps[key] = btn
            self._buttons.append(btn)
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        if not hasattr(self, "btn_algo_a"):
            return
        self.btn_algo_a.set_active(self.config.algorithm == Algorithm.ASTAR)
        self.btn_algo_b.set_active(self.config.algorithm == Algorithm.BFS)
        self.btn_diag.set_active(self.config.use_diagonals)
        self.btn_viz.set_active(self.config.record_trace)
        for key, btn in self.btn_maps.items():
            btn.set_active(getattr(self, "selected_map_key", None) == key)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 310), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, small=False):
            nonlocal y0
            f = self.font_big if big else (self.font_small if small else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 4

        def fmt(c: Optional[Coord]) -> str:
            return f"({c[0]}, {c[1]})" if c is not None else "NOT SET"

        line("Configuration", big=True, color=ACCENT_GOLD)
        line(f"Start: {fmt(self.board.start)}    End: {fmt(self.board.end)}")
        o = self.outcome
        if o is not None:
            line(f"Shortest Path: {o.path_length} blocks" if o.found else "Shortest Path: no path")
            line(f"Time: {o.elapsed_ms:.0f} ms    Popped: {o.expanded}")
        else:
            line("Shortest Path: N/A")
            line("Time: N/A")
        line(f"Open: {len(self.playback.open_cells)}    Closed: {len(self.playback.closed_cells)}")
        line("-" * 30)
        line(f"Algo: {self.config.algorithm.value}")
        line(f"Diagonals: {'on' if self.config.use_diagonals else 'off'}    "
             f"Visualization: {'on' if self.config.record_trace else 'off'}")
        line(f"Speed: {self.playback.steps_per_sec} steps/s    Tool: {self.tool.name.lower()}")
        line(f"Status: {self.state}")
        for msg in self._log.lines:
            line(msg, small=True)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main():
    _configure_logging()
    try:
        config = resolve_config()
    except ValueError as ex:
        logger.error("Bad configuration: %s", ex)
        sys.exit(2)
    board = Board(*DEFAULT_BOARD)
    board.set_tile(Cell.START, 10, DEFAULT_BOARD[1] // 2)
    board.set_tile(Cell.END, DEFAULT_BOARD[0] - 10, DEFAULT_BOARD[1] // 2)
    Viewer(board, config).run()

if __name__ == "__main__":
    main()
