"""Loan ledger: expense allocation and balancing service"""
