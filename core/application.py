"""Main application class that ties everything together."""

from dataclasses import asdict

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import galaxy as config
from .camera import Camera
from .input_handler import InputHandler
from .panel import ParameterPanel
from rendering import PointsRenderer, TextRenderer
from galaxy import (
    GalaxyGenerator, GalaxyParameters, ParameterStore, Scene,
    build_intro_timeline, warmup,
)


class Application:
    """Main application managing the render loop, input and the intro animation."""

    def __init__(self, seed=None, intro: bool = True):
        pygame.init()
        self.width = config.WINDOW["width"]
        self.height = config.WINDOW["height"]
        pygame.display.set_mode((self.width, self.height), DOUBLEBUF | OPENGL | RESIZABLE)
        pygame.display.set_caption(config.WINDOW["title"])

        # Core components
        self.camera = Camera()
        self.input_handler = InputHandler(self.camera)

        # Rendering components
        self.points_renderer = PointsRenderer()
        self.text_renderer = TextRenderer()

        # Galaxy
        print("[App] Compiling galaxy kernels...")
        warmup()
        self.scene = Scene()
        self.store = ParameterStore()
        self.generator = GalaxyGenerator(self.store, self.scene, seed=seed)
        self.panel = ParameterPanel(self.store, self.generator.on_parameter_change)
        self.intro = intro
        self.timeline = None
        self._start_galaxy()

        # State
        self.clock = pygame.time.Clock()
        self.start_ticks = pygame.time.get_ticks()
        self.running = True
        self.fps = 0
        self.show_help = True

        self._setup_gl()
        print("[App] Ready!")

    def _start_galaxy(self):
        """Reset parameters to their configured values and (re)start the intro."""
        self.store.update(**asdict(GalaxyParameters.from_config()))
        if self.intro:
            self.timeline = build_intro_timeline(self.store, self.generator.on_tween_update)
        else:
            # Jump straight to where the intro would end
            self.store.update(**{entry["name"]: entry["to"] for entry in config.ANIMATION})
            self.timeline = None
        self.generator.regenerate()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        self._resize(self.width, self.height)

    def _resize(self, width: int, height: int):
        """Keep the viewport and projection in step with the window."""
        self.width = max(1, width)
        self.height = max(1, height)
        glViewport(0, 0, self.width, self.height)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            self.width / self.height,
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if self.panel.handle_event(event):
                continue
            if event.type == VIDEORESIZE:
                self._resize(event.w, event.h)
                print(f"[App] Resized to {self.width}x{self.height}")
            elif event.type == KEYDOWN and event.key == K_h:
                self.show_help = not self.show_help
            elif event.type == KEYDOWN and event.key == K_r:
                print("[App] Restarting intro...")
                self._start_galaxy()
            elif not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        """Advance animation and camera."""
        dt = min(dt, config.RENDER["max_dt"])

        # Each tween tick regenerates the galaxy synchronously
        if self.timeline is not None:
            self.timeline.advance(dt)

        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

    def _render(self, elapsed: float):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        # Fetched every frame: regeneration replaces the object
        galaxy = self.generator.current_object
        if galaxy is not None:
            galaxy.rotation_y = elapsed * config.RENDER["rotation_speed"]

        self.points_renderer.draw_scene(self.scene, self.height)

        # Draw HUD
        screen_size = (self.width, self.height)
        count = galaxy.count if galaxy is not None else 0
        self.text_renderer.draw_text(
            f"Particles: {count:,}  |  FPS: {self.fps:.0f}  |  Regenerations: {self.generator.regeneration_count:,}",
            10, 10, screen_size, color=config.COLORS["text"]
        )
        if self.show_help:
            self.text_renderer.draw_text(
                "Drag/WASD: Rotate | Wheel/QE: Zoom | G: Parameters | R: Restart | H: Toggle help",
                10, 35, screen_size, color=config.COLORS["text"]
            )
        self.panel.draw(self.text_renderer, 10, 70, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            dt = self.clock.tick() / 1000.0  # Uncapped FPS
            self.fps = self.clock.get_fps()
            elapsed = (pygame.time.get_ticks() - self.start_ticks) / 1000.0

            self._handle_events()
            self._update(dt)
            self._render(elapsed)

        self.generator.dispose()
        self.points_renderer.release_all()
        pygame.quit()
        print("[App] Shutdown complete")
