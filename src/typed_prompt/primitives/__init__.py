"""JSON-contracted prompt primitives.

Each primitive has Input/Output models, an execute() function and a
main() that reads its parameters as JSON on stdin.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic import BaseModel

_PRIMITIVE_REGISTRY: dict[str, str] = {
    "request_value": "typed_prompt.primitives.request_value",
    "confirm_action": "typed_prompt.primitives.confirm_action",
}


def list_primitives() -> list[str]:
    return sorted(_PRIMITIVE_REGISTRY)


def get_output_schema(name: str) -> type[BaseModel] | None:
    """Get the Pydantic output schema for a known primitive.

    Hyphenated names are accepted. Returns None for unknown primitives.
    """
    module_path = _PRIMITIVE_REGISTRY.get(name.removesuffix(".py").replace("-", "_"))
    if module_path is None:
        return None

    module = importlib.import_module(module_path)
    # Convention: each module has a class ending in "Output"
    for attr in dir(module):
        obj = getattr(module, attr)
        if isinstance(obj, type) and attr.endswith("Output"):
            return obj
    return None
