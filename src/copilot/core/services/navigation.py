from abc import ABC, abstractmethod


class Navigator(ABC):
    """Route changes requested by the client core."""

    @abstractmethod
    def push(self, path: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def replace(self, path: str) -> None:
        raise NotImplementedError


class InMemoryNavigator(Navigator):
    """Keeps a history list instead of driving a real router."""

    def __init__(self, initial_path: str = "/") -> None:
        self.history: list[str] = [initial_path]

    @property
    def current_path(self) -> str:
        return self.history[-1]

    def push(self, path: str) -> None:
        self.history.append(path)

    def replace(self, path: str) -> None:
        self.history[-1] = path
