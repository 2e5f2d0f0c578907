"""Ordered multi-value requests."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from typed_prompt.handlers import ErrorHandler

if TYPE_CHECKING:
    from typed_prompt.engine import PromptEngine


@dataclass(frozen=True)
class ValueRequest:
    """One value to ask for: target type, prompt and optional handler."""

    target: Any
    prompt: str = ""
    handler: ErrorHandler | None = None
    name: str | None = None

    @classmethod
    def coerce(cls, item: ValueRequest | tuple[Any, ...]) -> ValueRequest:
        """Accept ``(target, prompt[, handler])`` tuples as shorthand."""
        if isinstance(item, ValueRequest):
            return item
        if not 1 <= len(item) <= 3:
            msg = f"Expected (target, prompt[, handler]), got {len(item)} items"
            raise ValueError(msg)
        return cls(*item)


class RequestList:
    """Builder for several requests answered strictly in order.

    Example:
        >>> ages = RequestList().add(int, "Age: ").add(float, "Height: ")
        >>> age, height = ages.collect(engine)  # doctest: +SKIP
    """

    def __init__(self, requests: Iterable[ValueRequest] = ()) -> None:
        self._requests: list[ValueRequest] = list(requests)

    def add(
        self,
        target: Any,
        prompt: str = "",
        handler: ErrorHandler | None = None,
        *,
        name: str | None = None,
    ) -> RequestList:
        self._requests.append(ValueRequest(target, prompt, handler, name))
        return self

    def __iter__(self) -> Iterator[ValueRequest]:
        return iter(self._requests)

    def __len__(self) -> int:
        return len(self._requests)

    def collect(self, engine: PromptEngine | None = None) -> list[Any]:
        """Run every request in order and return the values in that order."""
        if engine is None:
            from typed_prompt.engine import PromptEngine

            engine = PromptEngine()
        return engine.request_values(self._requests)

    def collect_as_dict(self, engine: PromptEngine | None = None) -> dict[str, Any]:
        """Like ``collect`` but keyed by request name (or position).

        Raises:
            ValueError: If two requests share a key. Checked before any
                prompt is shown.
        """
        keys = [
            request.name or str(index) for index, request in enumerate(self._requests)
        ]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            msg = f"Duplicate request names: {', '.join(duplicates)}"
            raise ValueError(msg)
        return dict(zip(keys, self.collect(engine)))
