"""A 2D orthographic camera."""

Vec2 = tuple[float, float]
Matrix4 = tuple[tuple[float, float, float, float], ...]

IDENTITY: Matrix4 = tuple(
    tuple(1.0 if row == col else 0.0 for col in range(4)) for row in range(4)
)


def _matmul(a: Matrix4, b: Matrix4) -> Matrix4:
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )


def _ortho(left: float, right: float, bottom: float, top: float) -> Matrix4:
    width = right - left
    height = top - bottom
    return (
        (2.0 / width, 0.0, 0.0, -(right + left) / width),
        (0.0, 2.0 / height, 0.0, -(top + bottom) / height),
        (0.0, 0.0, -1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def _translation(x: float, y: float, z: float) -> Matrix4:
    return (
        (1.0, 0.0, 0.0, x),
        (0.0, 1.0, 0.0, y),
        (0.0, 0.0, 1.0, z),
        (0.0, 0.0, 0.0, 1.0),
    )


def _scaling(x: float, y: float, z: float) -> Matrix4:
    return (
        (x, 0.0, 0.0, 0.0),
        (0.0, y, 0.0, 0.0),
        (0.0, 0.0, z, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


class Camera2D:
    """Camera for 2D games; matrices are stored row-major."""

    def __init__(self) -> None:
        self._position: Vec2 = (0.0, 0.0)
        self._ortho_matrix: Matrix4 = IDENTITY
        self._camera_matrix: Matrix4 = IDENTITY
        self._scale = 1.0
        self._needs_matrix_update = True
        self._screen_width = 500
        self._screen_height = 500

    def init(self, screen_width: int, screen_height: int) -> None:
        """Set the screen size and the orthographic projection."""
        self._screen_width = screen_width
        self._screen_height = screen_height
        self._ortho_matrix = _ortho(0.0, float(screen_width), 0.0, float(screen_height))

    @property
    def screen_width(self) -> int:
        return self._screen_width

    @property
    def screen_height(self) -> int:
        return self._screen_height

    @property
    def position(self) -> Vec2:
        return self._position

    @position.setter
    def position(self, value: Vec2) -> None:
        self._position = (float(value[0]), float(value[1]))
        self._needs_matrix_update = True

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = float(value)
        self._needs_matrix_update = True

    @property
    def camera_matrix(self) -> Matrix4:
        return self._camera_matrix

    def update(self) -> None:
        """Recompute the camera matrix if position or scale changed."""
        if not self._needs_matrix_update:
            return
        px, py = self._position
        translate = _translation(
            -px + self._screen_width // 2, -py + self._screen_height // 2, 0.0
        )
        matrix = _matmul(self._ortho_matrix, translate)
        matrix = _matmul(_scaling(self._scale, self._scale, 0.0), matrix)
        self._camera_matrix = matrix
        self._needs_matrix_update = False

    def convert_screen_to_world(self, screen_coords: Vec2) -> Vec2:
        """Map window pixel coordinates (y down) to world coordinates."""
        x, y = screen_coords
        y = self._screen_height - y
        x -= self._screen_width // 2
        y -= self._screen_height // 2
        x /= self._scale
        y /= self._scale
        return (x + self._position[0], y + self._position[1])

    def is_box_in_view(self, position: Vec2, dimensions: Vec2) -> bool:
        """Return True if the box overlaps the visible area."""
        view_w = self._screen_width / self._scale
        view_h = self._screen_height / self._scale
        min_distance_x = dimensions[0] / 2.0 + view_w / 2.0
        min_distance_y = dimensions[1] / 2.0 + view_h / 2.0
        center_x = position[0] + dimensions[0] / 2.0
        center_y = position[1] + dimensions[1] / 2.0
        x_depth = min_distance_x - abs(center_x - self._position[0])
        y_depth = min_distance_y - abs(center_y - self._position[1])
        return x_depth > 0 and y_depth > 0