from .attachment import Attachment
from .cancellation import CancellationToken, is_cancelled
from .candidate_request import CandidateRequest, method_url_matrix
from .form_draft import FormDraft, FormMode
from .mutation_state import MutationState, MutationTracker
from .optimistic_update import OptimisticState, OptimisticUpdate
from .order import (
    ORDER_STATUSES,
    ORDER_TYPE_INQUIRY,
    ORDER_TYPE_ORDER,
    BuyerOrderSummary,
    OrderLine,
    get_next_order_type,
)
from .record import (
    NEW_RECORD_KEY,
    ApprovalStatus,
    Record,
    digits_only,
    optional_text,
    record_id,
    same_id,
    to_float,
    to_int,
    to_text,
)

__all__ = [
    "Attachment",
    "CancellationToken",
    "is_cancelled",
    "CandidateRequest",
    "method_url_matrix",
    "FormDraft",
    "FormMode",
    "MutationState",
    "MutationTracker",
    "OptimisticState",
    "OptimisticUpdate",
    "ORDER_STATUSES",
    "ORDER_TYPE_INQUIRY",
    "ORDER_TYPE_ORDER",
    "BuyerOrderSummary",
    "OrderLine",
    "get_next_order_type",
    "NEW_RECORD_KEY",
    "ApprovalStatus",
    "Record",
    "digits_only",
    "optional_text",
    "record_id",
    "same_id",
    "to_float",
    "to_int",
    "to_text",
]
