"""Exception hierarchy for logit-sampler.

All exceptions derive from SamplerError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class SamplerError(Exception):
    """Base exception for all logit-sampler errors."""


class InvalidParameterError(SamplerError, ValueError):
    """A single sampling parameter is outside its legal range.

    Raised while building a sampler or resolving per-request options,
    before any sampling occurs. Also raised when an option fails type
    coercion or names a field that cannot be overridden per-request.
    """


class InvalidConfigurationError(SamplerError):
    """The parameters are individually valid but select no transform.

    Raised when temperature is non-zero and default (1.0) and none of
    top_k, top_p or min_p is set.
    """


class NoValidTokenError(SamplerError):
    """No admissible token remains.

    Raised when the logit vector is empty, holds no finite logit, or when
    the transform pipeline filters every candidate away.
    """


class SamplingFailureError(SamplerError):
    """The weighted draw could not select among the surviving candidates.

    Raised when every surviving weight is zero or not finite.
    """
