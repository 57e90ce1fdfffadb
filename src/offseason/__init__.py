"""
NFL Offseason Module

Draft order calculation once the Super Bowl is complete:
- DraftOrderService: Round 1 order from standings and playoff results,
  later rounds, pick explanations and mid-season projections
"""

from offseason.draft_order_exceptions import DraftOrderException
from offseason.draft_order_service import (
    DraftOrder,
    DraftOrderService,
    DraftPickOrder,
    calculate_draft_order,
)

__all__ = [
    'DraftOrder',
    'DraftOrderService',
    'DraftPickOrder',
    'DraftOrderException',
    'calculate_draft_order',
]
