
"""
Rendering helpers for Context Tetris.

The engine hands over read-only snapshots (FrameSnapshot, HudSnapshot); this
module turns them into blits and never mutates game state.

Caching:
- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render the static background (grid, panel, hold/next frames) per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache preview surfaces per piece kind for the hold and next boxes.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Optional
from ctxtris_config import COLS, ROWS
from ctxtris_layout import Dims
from ctxtris_piece import PIECES

BG = (10, 10, 26)
GRID = (17, 17, 37)
PANEL = (21, 22, 44)
FRAME = (50, 55, 90)
TEXT = (200, 210, 240)
DIM_TEXT = (74, 80, 104)
FLASH = "#ffffff"
PREVIEW_CELL = 20
BUTTON_LABELS = {"left": "Left", "right": "Right", "down": "Down", "drop": "Drop", "rotate": "Rotate", "hold": "Hold"}


def format_tokens(n: int) -> str:
    """Compact token count: 950, 1.2K, 3.4M."""
    if n >= 1_000_000: return f"{n / 1_000_000:.1f}M"
    if n >= 1_000: return f"{n / 1_000:.1f}K"
    return str(n)


@dataclass
class HudCache:
    score: int = -1
    lines: int = -1
    level: int = -1
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    speed_s: Optional[pygame.Surface] = None
    model_s: Optional[pygame.Surface] = None
    ctx_s: Optional[pygame.Surface] = None


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, small_font: Optional[pygame.font.Font] = None):
        self.dims = dims
        self.font = font
        self.small_font = small_font or font
        self._make_static()
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        self.preview_surf: Dict[str, pygame.Surface] = {}
        self.hud = HudCache()

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        for x in range(1, COLS):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(1, ROWS):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        pygame.draw.rect(self.bg, FRAME, (d.board_x - 1, d.board_y - 1, d.board_w + 2, d.board_h + 2), 1)
        panel = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, PANEL, panel)
        pygame.draw.rect(self.bg, FRAME, panel, 1)
        self.hold_rect = pygame.Rect(d.panel_x + 12, d.hold_y, d.panel_w - 24, d.slot_h)
        self.next_rect = pygame.Rect(d.panel_x + 12, d.next_y, d.panel_w - 24, d.slot_h * 3)
        for r in (self.hold_rect, self.next_rect):
            pygame.draw.rect(self.bg, (15, 16, 34), r)
            pygame.draw.rect(self.bg, FRAME, r, 1)
        # Touch strip
        for name, box in d.buttons:
            r = pygame.Rect(box)
            pygame.draw.rect(self.bg, PANEL, r, border_radius=6)
            pygame.draw.rect(self.bg, FRAME, r, 1, border_radius=6)
            label = self.small_font.render(BUTTON_LABELS[name], True, TEXT)
            self.bg.blit(label, label.get_rect(center=r.center))

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def cell(self, color: str) -> pygame.Surface:
        s = self.cell_surf.get(color)
        if s is None:
            c = self.dims.cell
            s = pygame.Surface((c-2, c-2))
            s.fill(pygame.Color(color))
            # Highlight top-left, shadow bottom-right
            hi = pygame.Color(color).lerp((255, 255, 255), 0.15)
            lo = pygame.Color(color).lerp((0, 0, 0), 0.3)
            pygame.draw.rect(s, hi, (0, 0, c-2, 2)); pygame.draw.rect(s, hi, (0, 0, 2, c-2))
            pygame.draw.rect(s, lo, (0, c-4, c-2, 2)); pygame.draw.rect(s, lo, (c-4, 0, 2, c-2))
            self.cell_surf[color] = s
        return s

    def ghost(self, color: str) -> pygame.Surface:
        g = self.ghost_surf.get(color)
        if g is None:
            c = self.dims.cell
            g = pygame.Surface((c-2, c-2), pygame.SRCALPHA)
            col = pygame.Color(color); col.a = 64
            pygame.draw.rect(g, col, (0, 0, c-2, c-2), 1)
            self.ghost_surf[color] = g
        return g

    def cell_rect(self, bx: int, by: int) -> pygame.Rect:
        c = self.dims.cell
        return pygame.Rect(self.dims.board_x + bx*c + 1, self.dims.board_y + by*c + 1, c-2, c-2)

    # ---------- Board ----------
    def draw_frame(self, screen: pygame.Surface, frame):
        """Draws the board, ghost, active piece, hold and next boxes."""
        screen.blit(self.bg, (0, 0))
        flashing = frame.flashing if frame.flash_frames > 0 else ()
        for y, row in enumerate(frame.grid):
            for x, color in enumerate(row):
                if color:
                    screen.blit(self.cell(FLASH if y in flashing else color), self.cell_rect(x, y))
        p = frame.active
        if p is not None:
            for r, row in enumerate(p.shape):
                for c, v in enumerate(row):
                    if v and frame.ghost_y + r >= 0:
                        screen.blit(self.ghost(p.color), self.cell_rect(p.x + c, frame.ghost_y + r))
            for r, row in enumerate(p.shape):
                for c, v in enumerate(row):
                    if v and p.y + r >= 0:
                        screen.blit(self.cell(p.color), self.cell_rect(p.x + c, p.y + r))
        if frame.hold:
            self._draw_preview(screen, frame.hold, self.hold_rect.x, self.hold_rect.y)
        for i, t in enumerate(frame.next):
            self._draw_preview(screen, t, self.next_rect.x, self.next_rect.y + i * self.dims.slot_h)

    # ---------- Hold / next previews ----------
    def preview(self, t: str) -> pygame.Surface:
        s = self.preview_surf.get(t)
        if s is None:
            d = PIECES[t]
            w = self.hold_rect.w
            s = pygame.Surface((w, self.dims.slot_h), pygame.SRCALPHA)
            sh = d.shape
            ox = (w - len(sh[0]) * PREVIEW_CELL) // 2
            oy = 8 + (60 - len(sh) * PREVIEW_CELL) // 2
            block = pygame.Surface((PREVIEW_CELL-2, PREVIEW_CELL-2))
            block.fill(pygame.Color(d.color))
            for y, row in enumerate(sh):
                for x, v in enumerate(row):
                    if v: s.blit(block, (ox + x*PREVIEW_CELL + 1, oy + y*PREVIEW_CELL + 1))
            label = self.small_font.render(d.name, True, DIM_TEXT)
            s.blit(label, label.get_rect(midtop=(w // 2, 70)))
            self.preview_surf[t] = s
        return s

    def _draw_preview(self, screen, t, x, y):
        screen.blit(self.preview(t), (x, y))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, hud):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Context Tetris", True, (197,202,233))
        if hud.score != self.hud.score:
            self.hud.score = hud.score
            self.hud.score_s = f.render(f"Tokens: {format_tokens(hud.score)}", True, TEXT)
        if hud.lines != self.hud.lines:
            self.hud.lines = hud.lines
            self.hud.lines_s = f.render(f"Lines: {hud.lines}", True, TEXT)
        if hud.level != self.hud.level:
            self.hud.level = hud.level
            self.hud.level_s = f.render(f"Level: {hud.level + 1}", True, TEXT)
            self.hud.speed_s = f.render(f"Speed: {hud.speed:.1f}x", True, TEXT)
            self.hud.model_s = f.render(hud.level_name, True, (230, 235, 255))
            self.hud.ctx_s = self.small_font.render(f"{hud.ctx} context", True, DIM_TEXT)
        y = d.panel_y + 12
        for s in (self.hud.title, self.hud.model_s, self.hud.ctx_s, self.hud.score_s,
                  self.hud.lines_s, self.hud.level_s, self.hud.speed_s):
            screen.blit(s, (d.panel_x + 12, y)); y += 18
        screen.blit(self.small_font.render("HOLD", True, DIM_TEXT), (self.hold_rect.x, self.hold_rect.y - 14))
        screen.blit(self.small_font.render("NEXT", True, DIM_TEXT), (self.next_rect.x, self.next_rect.y - 14))
