"""Base formatter interface for transition matrix output."""

from abc import ABC, abstractmethod

import typer

from ..markov.models import TransitionMatrix


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def render(self, matrix: TransitionMatrix) -> None:
        """Print the formatted matrix to stdout."""
        typer.echo(self.format(matrix), nl=False)

    @abstractmethod
    def format(self, matrix: TransitionMatrix) -> str:
        """Return formatted string representation of the matrix."""
