from collections.abc import Callable
from typing import Any


# Type aliases for Python dictionaries
type HandlerEvent = dict[str, Any]
type HandlerResponse = dict[str, Any]
type AppConfig = dict[str, Any]

# Predicate telling whether a shortcode is already taken
type ShortcodeExists = Callable[[str], bool]
