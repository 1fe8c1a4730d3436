"""
This class acts as the main controller for playback, bridging the GUI and
the interpreter backend. It decides how many commands run per frame and
turns errors into status messages; it never touches widgets itself.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from utils.errors import DispatchError

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    executed: int = 0
    last_text: str = ""
    finished: bool = False
    error: Optional[str] = None


class SimulationController:
    def __init__(self, processor):
        self.processor = processor
        self.config = processor.config
        self.playing = False
        self.speed = self.config.default_speed
        self.status = "Ready."
        self.status_is_error = False

    def load_program_file(self, file_path):
        try:
            with open(file_path, 'r') as f:
                return f.read(), None
        except OSError as e:
            return None, str(e)

    def compile(self, source):
        result = self.processor.compile(source)
        if result.success:
            self._set_status("Compiled.")
        else:
            self.playing = False
            self._set_status(result.error, True)
        return result.success

    def set_speed(self, speed):
        self.speed = max(0, min(self.config.max_speed, int(speed)))

    def steps_per_frame(self):
        """Speed 0 runs one command a frame; full speed runs max_steps_per_frame."""
        fraction = self.speed / self.config.max_speed
        extra = self.config.max_steps_per_frame - 1
        return 1 + int(fraction * fraction * extra)

    def toggle_play(self, source):
        """Run/Pause. Compiles first when no program is loaded."""
        if not self.processor.is_compiled() and not self.compile(source):
            return False
        self.playing = not self.playing
        return self.playing

    def stop(self):
        self.playing = False

    def step(self, source):
        """Run exactly one command, compiling first if needed."""
        if not self.processor.is_compiled() and not self.compile(source):
            return TickResult(error=self.status)

        result = self._run_batch(1)
        if not result.finished and not result.error:
            self._set_status("Step: " + result.last_text)
        return result

    def tick(self):
        """One frame of playback."""
        if not self.playing:
            return TickResult()
        return self._run_batch(self.steps_per_frame())

    def reset(self):
        self.playing = False
        self.processor.reset()
        self._set_status("Reset.")

    def _run_batch(self, count):
        result = TickResult()
        for _ in range(count):
            try:
                step = self.processor.step()
            except DispatchError as e:
                self.playing = False
                result.error = e.message
                self._set_status(e.message, True)
                return result

            if step.done:
                self.playing = False
                result.finished = True
                self._set_status("Program finished.")
                return result

            result.executed += 1
            result.last_text = step.text
        return result

    def _set_status(self, message, is_error=False):
        self.status = message
        self.status_is_error = is_error
        if is_error:
            logger.warning(message)
        else:
            logger.debug(message)
