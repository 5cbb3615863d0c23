"""Token selection subsystem for logit-sampler.

Holds the candidate record set threaded through the transform pipeline
and the result type returned by samplers.
"""

from logit_sampler.selection.types import SelectionResult, TokenRecord, TokenRecordSet

__all__ = [
    "SelectionResult",
    "TokenRecord",
    "TokenRecordSet",
]
