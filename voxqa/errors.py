"""Domain errors raised by the selection and scoring core.

Hierarchy:
    VoxQAError
    +-- ConfigurationMissingError
    +-- DuplicateSelectionError
    +-- MalformedJudgmentPayloadError
    +-- InvalidStatusTransitionError (ValueError)
    +-- SelectionNotFoundError
    +-- EvaluationNotFoundError
"""


class VoxQAError(Exception):
    """Base exception for all VoxQA errors."""

    pass


class ConfigurationMissingError(VoxQAError):
    """No rubric exists for a client/campaign combination, or the catalog is invalid."""

    pass


class DuplicateSelectionError(VoxQAError):
    """A selection insert hit the (agent, week) or recording uniqueness constraint."""

    def __init__(self, recording_id: int, agent_id: str) -> None:
        super().__init__(f"Recording {recording_id} / agent {agent_id} already selected")
        self.recording_id = recording_id
        self.agent_id = agent_id


class MalformedJudgmentPayloadError(VoxQAError):
    """The judgment source returned something that cannot be parsed."""

    retryable = True


class InvalidStatusTransitionError(VoxQAError, ValueError):
    """A status update used a value outside the defined set."""

    pass


class SelectionNotFoundError(VoxQAError):
    pass


class EvaluationNotFoundError(VoxQAError):
    pass
