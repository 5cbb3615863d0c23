"""Probability model: logits to normalized probabilities.

Every other component builds on :func:`stable_softmax`. The helpers here
operate on 1-D float64 numpy arrays and never modify their input.
"""

from __future__ import annotations

import numpy as np


def stable_softmax(logits: np.ndarray) -> np.ndarray:
    """Numerically stable softmax via shift-by-max.

    NaN logits are treated as ``-inf``. Degenerate inputs are handled
    without producing NaN:

    - all ``-inf`` (or empty): every probability is 0.0, and samplers
      must reject the vector rather than pick an arbitrary id.
    - one or more ``+inf``: the mass is split equally across them.

    Args:
        logits: 1-D logit array (may contain ``-inf`` for masked tokens).

    Returns:
        Float64 probability array of the same shape. Sums to 1.0 unless
        every logit is ``-inf``.
    """
    values = np.asarray(logits, dtype=np.float64)
    values = np.where(np.isnan(values), -np.inf, values)
    probs = np.zeros_like(values)
    if values.size == 0:
        return probs

    posinf_mask = np.isposinf(values)
    if np.any(posinf_mask):
        probs[posinf_mask] = 1.0 / int(np.sum(posinf_mask))
        return probs

    max_logit = np.max(values)
    if max_logit == -np.inf:
        return probs

    # -inf - max_logit is still -inf, exp(-inf) = 0.
    exp_shifted = np.exp(values - max_logit)
    total = np.sum(exp_shifted)
    result: np.ndarray = exp_shifted / total
    return result


def compute_shannon_entropy(probs: np.ndarray) -> float:
    """Compute Shannon entropy H = -sum(p_i * ln(p_i)) of a probability vector.

    Zero entries are skipped. Returns 0.0 for an empty or all-zero vector.

    Args:
        probs: 1-D probability array.

    Returns:
        Shannon entropy in nats.
    """
    mask = probs > 0
    if not np.any(mask):
        return 0.0
    entropy = -float(np.sum(probs[mask] * np.log(probs[mask])))
    # Guard against floating-point artifacts producing tiny negatives.
    return max(0.0, entropy)
