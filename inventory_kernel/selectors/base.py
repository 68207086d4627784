"""
Module: inventory_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors.  Selectors
    form the query side over the ledger, giving structured read access to
    items and transactions without any mutation capability.
Architecture position: Kernel > Selectors.  Reads only through the model's
    snapshot methods; never touches its registry or log directly.

Invariants enforced:
    - Read-only access: selectors never call a mutating model operation.
    - DTO return convention: selectors return frozen dataclasses, lists of
      them, or computed scalars.
"""

from abc import ABC

from inventory_kernel.services.inventory_model import InventoryModel


class BaseSelector(ABC):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept an InventoryModel from the caller and answer
        queries from its snapshots.  They MUST NOT mutate it.

    Non-goals:
        - BaseSelector does NOT define any query methods.
    """

    def __init__(self, model: InventoryModel):
        self.model = model
