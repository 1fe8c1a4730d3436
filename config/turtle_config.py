"""
Turtle configuration for the Logo interpreter.
Simple, clean configuration system with a few named presets.
"""
from dataclasses import dataclass, asdict
from typing import Tuple
import json
import logging

logger = logging.getLogger(__name__)


@dataclass
class TurtleConfig:
    """Configuration for the turtle, the plotter and the playback host."""
    name: str

    # Pen defaults
    pen_size: int = 6
    pen_color: Tuple[int, int, int] = (0x33, 0xff, 0xaa)
    hue_step: int = 5

    # PLOT defaults
    plot_from: float = -10.0
    plot_to: float = 10.0
    plot_steps: int = 100
    max_plot_steps: int = 10000
    dot_size: float = 3.0

    # Playback
    default_speed: int = 150
    max_speed: int = 300
    max_steps_per_frame: int = 25
    frame_interval_ms: int = 16

    log_level: str = "INFO"


class ConfigManager:
    """Manages turtle configurations with simple presets."""

    @staticmethod
    def default() -> TurtleConfig:
        """Standard settings matching the classic web turtle."""
        return TurtleConfig(name="Default")

    @staticmethod
    def fast() -> TurtleConfig:
        """Playback tuned for long programs."""
        config = ConfigManager.default()
        config.name = "Fast"
        config.default_speed = 300
        config.max_steps_per_frame = 200
        return config

    @staticmethod
    def presentation() -> TurtleConfig:
        """Thick pen and slow playback for demos."""
        return TurtleConfig(
            name="Presentation",
            pen_size=10,
            pen_color=(255, 200, 0),
            hue_step=8,
            default_speed=40,
            dot_size=6.0,
        )

    @staticmethod
    def get_config(preset: str) -> TurtleConfig:
        """Get configuration by preset name."""
        configs = {
            "default": ConfigManager.default,
            "fast": ConfigManager.fast,
            "presentation": ConfigManager.presentation,
        }
        factory = configs.get(preset.lower(), ConfigManager.default)
        return factory()

    @staticmethod
    def save_config(config: TurtleConfig, filepath: str):
        """Save configuration to JSON file."""
        data = asdict(config)
        data["pen_color"] = list(config.pen_color)

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load_config(filepath: str) -> TurtleConfig:
        """Load configuration from JSON file."""
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)

            data["pen_color"] = tuple(data.get("pen_color", (0x33, 0xff, 0xaa)))
            return TurtleConfig(**data)

        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load config %s (%s), using defaults", filepath, e)
            return ConfigManager.default()
