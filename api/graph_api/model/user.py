class UserData:
    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name

    @property
    def title(self) -> str:
        return self.name

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, UserData):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.id, self.name))

    def __repr__(self) -> str:
        return f"UserData(id={self.id!r}, name={self.name!r})"
