
import pygame
from typing import Optional, Tuple
from ctxtris_game import HudSnapshot, Phase
from ctxtris_render import format_tokens

class Overlay:
    """Start / paused / game-over card drawn over the board."""

    def lines(self, hud: HudSnapshot) -> Optional[Tuple[str, str, str]]:
        if hud.phase is Phase.NOT_STARTED:
            return ("CONTEXT TETRIS", "Pack tokens into the context window", "Start Game")
        if hud.phase is Phase.PAUSED:
            return ("PAUSED", "Press P to resume", "Resume")
        if hud.phase is Phase.GAME_OVER:
            sub = f"{format_tokens(hud.final_score)} tokens packed · Level {hud.final_level + 1}: {hud.level_name}"
            return ("CONTEXT OVERFLOW", sub, "Try Again")
        return None

    def draw(self, screen, big_font, font, rect, hud: HudSnapshot):
        card = self.lines(hud)
        if card is None: return
        title, sub, button = card
        s = pygame.Surface(rect.size, pygame.SRCALPHA); s.fill((10, 10, 26, 215))
        screen.blit(s, rect.topleft)
        cx, cy = rect.center
        for surf, y in ((big_font.render(title, True, (230, 240, 255)), cy - 40),
                        (font.render(sub, True, (170, 180, 215)), cy),
                        (font.render(f"[Enter] {button}", True, (255, 255, 255)), cy + 36)):
            screen.blit(surf, surf.get_rect(center=(cx, y)))
