"""Scene classes for the shuffle table."""

from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.scenes.table_scene import TableScene

__all__ = ["BaseScene", "TableScene"]
