"""Database models."""

from voxqa.models.auditor import Auditor
from voxqa.models.recording import Recording
from voxqa.models.selection import Selection
from voxqa.models.evaluation import Evaluation, EvaluationChange

__all__ = ["Auditor", "Recording", "Selection", "Evaluation", "EvaluationChange"]
