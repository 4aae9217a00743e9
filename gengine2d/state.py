"""Game states and the machine that runs the active one."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .camera import Camera2D
from .inputs import InputManager


class GameState(ABC):
    """One screen of the game: it handles events, updates and draws."""

    def __init__(
        self,
        state_machine: StateManager,
        window: Any,
        input_manager: InputManager,
        current_level: int,
    ) -> None:
        self.state_machine = state_machine
        self.window = window
        self.input_manager = input_manager
        self.camera = Camera2D()
        self.current_level = current_level

    @abstractmethod
    def init(self) -> None:
        """Prepare the state when it becomes active."""

    @abstractmethod
    def process_events(self) -> None:
        """Handle pending input events."""

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the simulation by ``delta_time`` steps."""

    def update_input_manager(self) -> None:
        self.input_manager.update()

    @abstractmethod
    def update_camera(self) -> None:
        """Move the camera for this frame."""

    @abstractmethod
    def draw(self) -> None:
        """Render the state."""

    def change_state(self, machine: StateManager, state: GameState) -> None:
        machine.change_state(state)


class StateManager:
    """Holds the active game state and forwards the game loop to it."""

    def __init__(self) -> None:
        self._game_states: list[GameState] = []
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def current(self) -> GameState:
        """The active state."""
        if not self._game_states:
            raise RuntimeError("no active game state")
        return self._game_states[-1]

    def change_state(self, game_state: GameState) -> None:
        """Replace the active state with ``game_state`` and initialise it."""
        self._running = True
        if self._game_states:
            self._game_states.pop()
        self._game_states.append(game_state)
        game_state.init()

    def update_input_manager(self) -> None:
        self.current.update_input_manager()

    def update(self, delta_time: float) -> None:
        self.current.update(delta_time)

    def process_events(self) -> None:
        self.current.process_events()

    def update_camera(self) -> None:
        self.current.update_camera()

    def draw(self) -> None:
        self.current.draw()

    def quit(self) -> None:
        self._running = False