"""Domain model entities for famlink."""

from famlink.domain.model.account import Account
from famlink.domain.model.connection import Connection, ConnectionView, TransitionGuard
from famlink.domain.model.external_person import ExternalPerson
from famlink.domain.model.finance import AssetRecord, ExpenseRecord, IncomeRecord
from famlink.domain.model.identity import NO_MATCH, IdentityMatch
from famlink.domain.model.linked_data import (
    LinkedAsset,
    LinkedDataSummary,
    LinkedExpense,
    LinkedIncome,
)
from famlink.domain.model.notification import Notification

__all__ = [
    "Account",
    "ExternalPerson",
    "Connection",
    "ConnectionView",
    "TransitionGuard",
    "IdentityMatch",
    "NO_MATCH",
    "Notification",
    "ExpenseRecord",
    "IncomeRecord",
    "AssetRecord",
    "LinkedExpense",
    "LinkedIncome",
    "LinkedAsset",
    "LinkedDataSummary",
]
