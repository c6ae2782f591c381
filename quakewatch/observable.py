from typing import Any, Callable, List


class Subscribers:
    def __init__(self):
        self.callbacks: List[Callable] = []

    def subscribe(self, callback: Callable):
        self.callbacks.append(callback)

    def unsubscribe(self, callback: Callable):
        if callback in self.callbacks:
            self.callbacks.remove(callback)

    def notify(self, payload: Any):
        # Iterate over copy so a callback may unsubscribe itself
        for callback in self.callbacks[:]:
            callback(payload)


class ObservableValue(Subscribers):
    """A single value that notifies subscribers when it is set."""

    def __init__(self, initial=None):
        super().__init__()
        self._value = initial

    def get(self):
        return self._value

    def set(self, value):
        self._value = value
        self.notify(value)


class ObservableList(Subscribers):
    """A list replaced wholesale; subscribers receive a snapshot on every change."""

    def __init__(self, items=None):
        super().__init__()
        self._items = list(items or [])

    def items(self):
        return list(self._items)

    def set_all(self, items):
        self._items = list(items)
        self.notify(self.items())

    def clear(self):
        self._items = []
        self.notify([])

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
