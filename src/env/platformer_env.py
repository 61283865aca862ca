# src/env/platformer_env.py
from __future__ import annotations
from typing import Optional, Tuple, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, STRIPE_W, TITLE, VARIANT_ZOOM, VARIANTS
from src.game.player import KeyState
from src.game.scene import GameScene
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

# horizontal action index -> (left, right)
H_ACTIONS = {0: (False, False), 1: (True, False), 2: (False, True)}


def action_to_keys(action) -> KeyState:
    h, jump = int(action[0]), int(action[1])
    left, right = H_ACTIONS[h]
    return KeyState(up=bool(jump), down=False, left=left, right=right)


class PlatformerEnv(gym.Env):
    """
    Gymnasium wrapper around GameScene (vector observations, headless by default).
    - Simulation at 60 Hz (internal), agent acts every `frame_skip` frames.
    - Action: MultiDiscrete([3, 2]) = (none/left/right, jump).
    - Reward: horizontal progress in stripes during the decision step.
    - Never terminates (the ground spans the whole world); truncates on the time limit.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 variant: str = VARIANT_ZOOM,
                 viewport: Tuple[int, int] = (WIDTH, HEIGHT),
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert variant in VARIANTS, f"Unknown variant {variant!r}"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.variant = variant
        self.viewport = (int(viewport[0]), int(viewport[1]))
        self.frame_skip = int(frame_skip)

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.MultiDiscrete([3, 2])
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.scene: Optional[GameScene] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.jumps: int = 0

        # Rendering
        self.screen = None
        self.canvas = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # With a seed the layout is reproducible; without one the scene draws its own.
        layout_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
        self.scene = GameScene(variant=self.variant, seed=layout_seed, smooth_dt=False)
        self.scene.preload()
        self.scene.create(*self.viewport)

        self.timestep = 0
        self.jumps = 0
        self.current_seed = self.scene.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "x": self.scene.player.x}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), f"Invalid action {action}"
        assert self.scene is not None, "reset() first"

        keys = action_to_keys(action)
        x0 = self.scene.player.x
        for _ in range(self.frame_skip):
            was_grounded = self.scene.player.body.touching_down
            self.scene.update(keys, self.dt)
            if keys.up and was_grounded and self.scene.player.body.vy < 0:
                self.jumps += 1

        reward = float((self.scene.player.x - x0) / STRIPE_W)

        self.timestep += 1
        terminated = False
        truncated = (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions)

        obs = self._get_obs()
        info = {
            "x": self.scene.player.x,
            "y": self.scene.player.y,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": self.scene.player.body.touching_down,
            "zoom": self.scene.camera.zoom,
            "jumps": self.jumps,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _get_obs(self) -> np.ndarray:
        assert self.scene is not None
        obs = build_observation(self.scene)
        return np.clip(obs, OBS_LOW, OBS_HIGH)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.scene is None:
            return None
        if self.render_mode == "human":
            if self.screen is None:
                pygame.init()
                pygame.display.set_caption(f"{TITLE} — env")
                self.screen = pygame.display.set_mode(self.viewport)
                self.clock = pygame.time.Clock()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.close()
                    return None
            self.scene.draw(self.screen)
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # rgb_array: off-screen surface, no window
        if self.canvas is None:
            self.canvas = pygame.Surface(self.viewport)
        self.scene.draw(self.canvas)
        return np.transpose(pygame.surfarray.array3d(self.canvas), (1, 0, 2)).copy()

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
        self.canvas = None
