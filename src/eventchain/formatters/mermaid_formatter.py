"""Mermaid diagram formatter."""

from ..markov.diagram import matrix_to_diagram
from ..markov.models import TransitionMatrix
from .base import BaseFormatter


class MermaidFormatter(BaseFormatter):
    """Render a ``graph LR`` flowchart, dropping edges not above ``min_weight``."""

    def __init__(self, min_weight: int = 0):
        self.min_weight = min_weight

    def format(self, matrix: TransitionMatrix) -> str:
        return matrix_to_diagram(matrix, self.min_weight)
