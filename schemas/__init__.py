from schemas.auth import LoginRequest, LoginResponse, UserSchema
from schemas.draft import DraftSummary
from schemas.files import FolderCreate
from schemas.submission import (
    BankAccountSchema,
    BankTransferPayment,
    CardPayment,
    CardSchema,
    DependentSchema,
    DraftSaveRequest,
    PaymentRecord,
    SubmissionSchema,
    SupplementalPlanSchema,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "UserSchema",
    "DraftSummary",
    "FolderCreate",
    "BankAccountSchema",
    "BankTransferPayment",
    "CardPayment",
    "CardSchema",
    "DependentSchema",
    "DraftSaveRequest",
    "PaymentRecord",
    "SubmissionSchema",
    "SupplementalPlanSchema",
]
