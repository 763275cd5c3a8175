"""SQLAlchemy models"""
from loan_ledger.models.person import Person
from loan_ledger.models.group import Group, GroupMember
from loan_ledger.models.entry import Entry
from loan_ledger.models.payment_allocation import PaymentAllocation

__all__ = ["Person", "Group", "GroupMember", "Entry", "PaymentAllocation"]
