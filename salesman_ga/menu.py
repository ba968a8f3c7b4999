from dataclasses import dataclass
from typing import Callable, Dict, Union


Label = Union[str, Callable[[], str]]


def _render(label: Label) -> str:
    return label() if callable(label) else label


@dataclass
class MenuItem:
    key: str
    text: Label
    # Returns True when the menu should stop after running the action.
    action: Callable[[], bool]

    @property
    def label(self) -> str:
        return _render(self.text)


class Menu:
    """
    Text menu: a registry of actions selected by key.

    Items are listed sorted by key. The title and item texts may be callables,
    which are evaluated every time the menu is printed so they can reflect
    the current program state. ``input_fn`` and ``output_fn`` default to the
    console and can be replaced to script the menu.
    """

    def __init__(self, title: Label, input_fn: Callable[[str], str] = input, output_fn: Callable[[str], None] = print):
        if not title:
            raise ValueError("title must not be empty")
        self.title = title
        self.items: Dict[str, MenuItem] = {}
        self._input = input_fn
        self._output = output_fn

    def add_item(self, key: str, text: Label, action: Callable[[], bool]) -> bool:
        if not key:
            raise ValueError("key must not be empty")
        if not text:
            raise ValueError("text must not be empty")
        if key in self.items:
            return False
        self.items[key] = MenuItem(key, text, action)
        return True

    def remove_item(self, key: str) -> bool:
        return self.items.pop(key, None) is not None

    def print_menu(self) -> None:
        self._output("")
        self._output(_render(self.title))
        for key in sorted(self.items):
            self._output(f"{key} {self.items[key].label}")

    def run(self) -> None:
        if not self.items:
            raise RuntimeError("cannot run an empty menu")
        done = False
        while not done:
            self.print_menu()
            selection = self.read_string("Enter selection:").strip()
            item = self.items.get(selection)
            if item is None:
                self._output("Invalid selection.")
                continue
            done = item.action()

    def read_string(self, prompt: str) -> str:
        return self._input(prompt + " ")

    def read_int(self, prompt: str, low: int, high: int) -> int:
        while True:
            try:
                value = int(self.read_string(prompt))
            except ValueError:
                value = None
            if value is not None and low <= value <= high:
                return value
            self._output("Invalid input.")

    def read_float(self, prompt: str, low: float, high: float) -> float:
        while True:
            try:
                value = float(self.read_string(prompt))
            except ValueError:
                value = None
            if value is not None and low <= value <= high:
                return value
            self._output("Invalid input.")
