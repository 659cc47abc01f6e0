"""Layer capability shared by trainable stages."""

from typing import Protocol, runtime_checkable

from fixnet.math import Matrix


@runtime_checkable
class Layer(Protocol):
    """Maps a (SAMPLES × inputs) batch to a (SAMPLES × outputs) batch."""

    @property
    def inputs(self) -> int: ...

    @property
    def outputs(self) -> int: ...

    def forward(self, batch: Matrix) -> Matrix: ...
