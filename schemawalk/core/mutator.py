"""Mutator protocol for schemawalk.

A mutator is the caller-supplied per-node behaviour. The walker accepts
either a plain callable taking one Schema, or an object implementing
``Mutator.on_schema``. A mutator signals failure by raising; whatever it
raises aborts the walk and reaches the caller unchanged.

A mutator may change the node it receives, including its branch contents,
but it must not walk children itself and must not call back into the walker.
"""

from abc import ABC, abstractmethod
from typing import Callable, Union

from .node import Schema


NodeCallback = Callable[[Schema], None]


class Mutator(ABC):
    """Object form of a node callback."""

    @abstractmethod
    def on_schema(self, node: Schema) -> None:
        """Process one node, post-order.

        Args:
            node: The node being completed; its children are already done

        Raises:
            Exception: Any exception aborts the walk
        """
        pass

    def __call__(self, node: Schema) -> None:
        self.on_schema(node)


class FunctionMutator(Mutator):
    """Wraps a plain callable so it can be combined with other mutators."""

    def __init__(self, func: NodeCallback):
        self.func = func

    def on_schema(self, node: Schema) -> None:
        self.func(node)

    def __repr__(self) -> str:
        name = getattr(self.func, '__name__', repr(self.func))
        return f"{self.__class__.__name__}({name})"


def as_callback(mutator: Union[Mutator, NodeCallback]) -> NodeCallback:
    """Normalise a Mutator or callable into a node callback.

    Raises:
        TypeError: If ``mutator`` is neither
    """
    if isinstance(mutator, Mutator):
        return mutator.on_schema
    if hasattr(mutator, 'on_schema') and callable(mutator.on_schema):
        return mutator.on_schema
    if callable(mutator):
        return mutator
    raise TypeError(f"mutator must be callable or define on_schema(), got {type(mutator).__name__}")


def chain(*mutators: Union[Mutator, NodeCallback]) -> NodeCallback:
    """Combine mutators into one callback that runs them in order.

    The first exception stops the chain and propagates.
    """
    callbacks = [as_callback(m) for m in mutators]

    def _chained(node: Schema) -> None:
        for callback in callbacks:
            callback(node)

    return _chained
