import logging
import pygame, sys
from ctxtris_config import CONFIG
from ctxtris_game import GameState
from ctxtris_input import InputMapper
from ctxtris_layout import compute_dims
from ctxtris_overlay import Overlay
from ctxtris_render import RenderAssets

logger = logging.getLogger("ctxtris")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP, pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Context Tetris")
    font = pygame.font.SysFont(None, 22)
    small_font = pygame.font.SysFont(None, 16)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font, small_font)
    overlay = Overlay()
    inputs = InputMapper(dims)
    game = GameState()
    clock = pygame.time.Clock()
    board_rect = pygame.Rect(dims.board_x, dims.board_y, dims.board_w, dims.board_h)
    logger.info("Window %dx%d, seed %s", dims.total_w, dims.total_h, CONFIG["SEED"])

    while True:
        dt = clock.tick(CONFIG["FPS"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            action = inputs.map_event(e)
            if action is not None:
                game.apply(action)

        if game.running:
            for action in inputs.repeat(dt, pygame.key.get_pressed()):
                game.apply(action)

        game.tick()

        hud = game.hud()
        render.draw_frame(screen, game.snapshot())
        render.draw_panel_hud(screen, hud)
        overlay.draw(screen, big_font, font, board_rect, hud)
        pygame.display.flip()


if __name__ == '__main__':
    main()
