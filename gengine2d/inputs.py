"""Keyboard and mouse state tracking."""


class InputManager:
    """Tracks which keys are held now and were held on the previous frame."""

    def __init__(self) -> None:
        self._key_map: dict[int, bool] = {}
        self._previous_key_map: dict[int, bool] = {}
        self._mouse_coords: tuple[float, float] = (0.0, 0.0)

    def update(self) -> None:
        """Remember the current key states as last frame's."""
        self._previous_key_map.update(self._key_map)

    def press_key(self, key_id: int) -> None:
        self._key_map[key_id] = True

    def release_key(self, key_id: int) -> None:
        self._key_map[key_id] = False

    def set_mouse_coords(self, x: float, y: float) -> None:
        self._mouse_coords = (float(x), float(y))

    @property
    def mouse_coords(self) -> tuple[float, float]:
        return self._mouse_coords

    def is_key_down(self, key_id: int) -> bool:
        """True if the key is held down."""
        return self._key_map.get(key_id, False)

    def was_key_down(self, key_id: int) -> bool:
        """True if the key was held down last frame."""
        return self._previous_key_map.get(key_id, False)

    def is_key_pressed(self, key_id: int) -> bool:
        """True if the key went down this frame."""
        return self.is_key_down(key_id) and not self.was_key_down(key_id)