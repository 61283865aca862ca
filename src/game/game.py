# src/game/game.py
import sys, argparse
import pygame
from pygame import K_ESCAPE, K_r
from .config import (
    WIDTH, HEIGHT, FPS, TITLE, SEED_DEFAULT, VARIANTS, VARIANT_COLUMNS,
    COLOR_FG, COLOR_HINT,
)
from .player import KeyState
from .scene import GameScene

MIN_VIEWPORT = (200, 260)   # below this the ground (200 px) eats the whole window


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--variant", choices=VARIANTS, default=VARIANT_COLUMNS,
                   help="'columns': decorated level, fixed zoom. 'zoom': bare ground, dynamic zoom.")
    p.add_argument("--seed", type=int, default=None,
                   help="Layout seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--smooth-dt", action="store_true",
                   help="Frame-rate independent zoom smoothing (default: per-frame factor).")
    return p.parse_args(argv)


def resolve_seed(seed_arg):
    """None -> SEED_DEFAULT; -1 -> None (scene picks a random one)."""
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


class Host:
    """
    pygame side of the scene contract: owns the window, the clock and the event pump,
    and calls the registered scene's hooks.
    """
    def __init__(self, width: int, height: int):
        self.width = max(MIN_VIEWPORT[0], int(width))
        self.height = max(MIN_VIEWPORT[1], int(height))
        self.scene = None
        self.screen = None
        self.clock = None
        self.font = None

    def register(self, scene: GameScene) -> GameScene:
        self.scene = scene
        return scene

    def _resize(self, w: int, h: int):
        self.width = max(MIN_VIEWPORT[0], int(w))
        self.height = max(MIN_VIEWPORT[1], int(h))
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        self.scene.handle_resize(self.width, self.height)

    def _draw_hud(self):
        s = self.scene
        p = s.player
        hud = (f"Seed: {s.seed}   Variant: {s.variant}   "
               f"x={int(p.x)} y={int(p.y)}   zoom={s.camera.zoom:.2f}")
        self.screen.blit(self.font.render(hud, True, COLOR_FG), (12, 10))
        self.screen.blit(self.font.render("WASD move/jump | R respawn | ESC quit", True, COLOR_HINT), (12, 32))

    def run(self):
        assert self.scene is not None, "register() a scene first"
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("jetbrainsmono", 18)

        self.scene.preload()
        self.scene.create(self.width, self.height)
        print(f"[game] variant={self.scene.variant} seed={self.scene.seed} "
              f"viewport={self.width}x{self.height}")

        while True:
            dt = self.clock.tick(FPS) / 1000.0
            if dt > 1.0 / 30.0:  # clamp stalls
                dt = 1.0 / 30.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit(); sys.exit()
                if event.type == pygame.KEYDOWN:
                    if event.key == K_ESCAPE:
                        pygame.quit(); sys.exit()
                    if event.key == K_r:
                        self.scene.respawn_player()
                if event.type == pygame.VIDEORESIZE:
                    self._resize(event.w, event.h)

            self.scene.update(KeyState.from_pressed(pygame.key.get_pressed()), dt)

            self.scene.draw(self.screen)
            self._draw_hud()
            pygame.display.flip()


def run(argv=None):
    args = parse_args(argv)
    host = Host(args.width, args.height)
    host.register(GameScene(variant=args.variant, seed=resolve_seed(args.seed),
                            smooth_dt=args.smooth_dt))
    host.run()

if __name__ == "__main__":
    run()
