"""Random variable sources for the queue simulation."""

from .random_variables import (
    UniformSource,
    BufferedUniformSource,
    uniform_source,
    sequence_source,
    validate_rate,
    exponential,
    exponential_distribution,
    exponential_pdf,
)

__all__ = [
    'UniformSource',
    'BufferedUniformSource',
    'uniform_source',
    'sequence_source',
    'validate_rate',
    'exponential',
    'exponential_distribution',
    'exponential_pdf',
]
