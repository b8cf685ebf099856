"""JSON formatter."""

import json

from ..markov.models import TransitionMatrix
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the matrix as nested ``{source: {destination: count}}``."""

    def format(self, matrix: TransitionMatrix) -> str:
        return json.dumps(matrix.to_dict(), indent=2, sort_keys=True) + "\n"
