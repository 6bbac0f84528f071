from .utils import backtick


class Field:
    """A selected column, optionally cast to String (needed for enum columns)."""

    def __init__(self, name: str):
        self.name = name
        self.cast_to_string = False

    def to_string(self) -> "Field":
        self.cast_to_string = True
        return self

    def sql(self) -> str:
        if self.cast_to_string:
            return f"toString({backtick(self.name)}) AS {backtick(self.name)}"
        return backtick(self.name)
