"""Observable single-value cells and the bindings between them."""

from axiomatic.slot.slot import SLOT_ID, SLOT_MODELS

__all__ = ["SLOT_ID", "SLOT_MODELS"]
