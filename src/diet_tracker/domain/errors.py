"""Domain errors raised by the diet tracker core."""


class DietTrackerError(Exception):
    """Base class for validation outcomes reported back to the caller."""


class DuplicateIdError(DietTrackerError):
    """Raised when a food identifier is already taken."""

    def __init__(self, food_id: str) -> None:
        super().__init__(f"Food already exists: {food_id}")
        self.food_id = food_id


class UnknownFoodError(DietTrackerError):
    """Raised when a food identifier is not in the catalog."""

    def __init__(self, food_id: str) -> None:
        super().__init__(f"Unknown food: {food_id}")
        self.food_id = food_id


class UnknownComponentError(UnknownFoodError):
    """Raised when a composite references a food that does not exist."""

    def __init__(self, composite_id: str, component_id: str) -> None:
        super().__init__(component_id)
        self.args = (f"Unknown component {component_id} in composite {composite_id}",)
        self.composite_id = composite_id


class CyclicReferenceError(DietTrackerError):
    """Raised when a composite would (transitively) contain itself."""

    def __init__(self, food_id: str, path: list[str]) -> None:
        super().__init__(
            f"Composite {food_id} forms a cycle: {' -> '.join(path)}"
        )
        self.food_id = food_id
        self.path = path


class InvalidFoodError(DietTrackerError):
    """Raised when a food definition carries invalid values."""


class InvalidServingsError(DietTrackerError):
    """Raised when a serving count is not strictly positive."""

    def __init__(self, servings: float) -> None:
        super().__init__(f"Servings must be positive, got {servings}")
        self.servings = servings


class IndexOutOfRangeError(DietTrackerError):
    """Raised when a log position does not exist for the date."""

    def __init__(self, position: int, size: int) -> None:
        super().__init__(f"Position {position} is out of range (1..{size})")
        self.position = position
        self.size = size


class EmptyUndoStackError(DietTrackerError):
    """Raised when there is nothing left to undo."""

    def __init__(self, stack: str) -> None:
        super().__init__(f"Nothing to undo in the {stack} history")
        self.stack = stack


class NoProfileEstablishedError(DietTrackerError):
    """Raised when no profile exists at or before the requested date."""


class InvalidProfileError(DietTrackerError):
    """Raised when profile fields fail validation."""


class UnknownCalculationMethodError(DietTrackerError):
    """Raised when a calorie calculation method name is not registered."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unknown calculation method: {method}")
        self.method = method


class NotLoggedInError(DietTrackerError):
    """Raised when a user-scoped operation runs outside a session."""


class InternalConsistencyError(RuntimeError):
    """Raised when stored data contradicts a core invariant."""
