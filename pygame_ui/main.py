"""Main entry point for the pygame shuffle table."""

import sys

import pygame

from config import configure_logging
from pygame_ui.config import DIMENSIONS
from pygame_ui.scenes.table_scene import TableScene


class Application:
    """Main application class managing the game loop."""

    def __init__(self):
        """Initialize the application."""
        configure_logging()
        pygame.init()
        pygame.display.set_caption("Shuffle Peek")

        self.screen = pygame.display.set_mode(
            (DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SCREEN_HEIGHT)
        )
        self.clock = pygame.time.Clock()
        self.running = True

        self.scene = TableScene()
        self.scene.on_enter()

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            self.scene.handle_event(event)

    def update(self, dt: float) -> None:
        """Update application state.

        Args:
            dt: Delta time in seconds
        """
        self.scene.update(dt)

    def draw(self) -> None:
        """Render the application."""
        self.scene.draw(self.screen)
        pygame.display.flip()

    def run(self) -> None:
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(DIMENSIONS.TARGET_FPS) / 1000.0

            self.handle_events()
            self.update(dt)
            self.draw()

        self.scene.on_exit()
        pygame.quit()
        sys.exit()


def main() -> None:
    """Entry point for the pygame UI."""
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
