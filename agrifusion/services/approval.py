# agrifusion/services/approval.py
from enum import Enum
from typing import assert_never

from ..model import ProfileStatus


class ApprovalState(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


_MESSAGES = {
    ApprovalState.APPROVED: "Your consultant account is approved.",
    ApprovalState.PENDING: "Your application is under review. Some features are locked until approval.",
    ApprovalState.REJECTED: "Your application requires additional review. Our team will contact you shortly.",
    ApprovalState.SUSPENDED: "Your account has been temporarily suspended. Please contact support.",
}


def approval_state(status: ProfileStatus) -> ApprovalState:
    match status:
        case ProfileStatus.APPROVED | ProfileStatus.ACTIVE:
            return ApprovalState.APPROVED
        case ProfileStatus.PENDING:
            return ApprovalState.PENDING
        case ProfileStatus.REJECTED:
            return ApprovalState.REJECTED
        case ProfileStatus.SUSPENDED:
            return ApprovalState.SUSPENDED
        case _:
            assert_never(status)


def approval_summary(status) -> dict:
    state = approval_state(ProfileStatus(status))
    return {
        "status": state.value,
        "is_approved": state is ApprovalState.APPROVED,
        "is_pending": state is ApprovalState.PENDING,
        "message": _MESSAGES[state],
    }
