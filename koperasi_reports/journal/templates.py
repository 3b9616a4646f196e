"""
Journal templates for the koperasi transaction kinds.

Each template turns a transaction payload into the journal lines it posts and
fixes the cash-flow activity classification at posting time, so reports never
have to infer it from the reference type.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Tuple

from koperasi_reports.exceptions import UnsupportedTransactionType
from koperasi_reports.models.journal import ActivityClassification, EntryStatus, JournalEntry, JournalLine

CASH = "1001"
LOAN_RECEIVABLE = "1101"
LOAN_INTEREST_INCOME = "4001"
SERVICE_FEE_EXPENSE = "5001"

SAVINGS_ACCOUNTS = {
    "pokok": "2001",
    "wajib": "2002",
}
VOLUNTARY_SAVINGS = "2003"

def savings_account(kind: str) -> str:
    return SAVINGS_ACCOUNTS.get(kind, VOLUNTARY_SAVINGS)

def _line(account_code: str, description: str, debit: Decimal = Decimal(0), credit: Decimal = Decimal(0)) -> JournalLine:
    return JournalLine(account_code=account_code, debit_amount=debit, credit_amount=credit, description=description)

def _savings_deposit(data: Dict[str, Any]) -> Tuple[str, List[JournalLine]]:
    kind, amount = data["account_type"], data["amount"]
    return f"Setoran Simpanan {kind} - {data['member_id']}", [
        _line(CASH, "Penerimaan kas dari setoran simpanan", debit=amount),
        _line(savings_account(kind), f"Simpanan {kind} anggota", credit=amount),
    ]

def _savings_withdrawal(data: Dict[str, Any]) -> Tuple[str, List[JournalLine]]:
    kind, amount = data["account_type"], data["amount"]
    return f"Penarikan Simpanan {kind} - {data['member_id']}", [
        _line(savings_account(kind), f"Penarikan simpanan {kind}", debit=amount),
        _line(CASH, "Pengeluaran kas untuk penarikan simpanan", credit=amount),
    ]

def _loan_disbursement(data: Dict[str, Any]) -> Tuple[str, List[JournalLine]]:
    principal = data["principal_amount"]
    return f"Pencairan Pinjaman {data['loan_type']} - {data['member_id']}", [
        _line(LOAN_RECEIVABLE, "Piutang pinjaman anggota", debit=principal),
        _line(CASH, "Pencairan pinjaman tunai", credit=principal),
    ]

def _loan_payment(data: Dict[str, Any]) -> Tuple[str, List[JournalLine]]:
    return f"Pembayaran Angsuran Pinjaman - {data['member_id']}", [
        _line(CASH, "Penerimaan pembayaran angsuran", debit=data["payment_amount"]),
        _line(LOAN_RECEIVABLE, "Pengurangan piutang pinjaman", credit=data["principal_amount"]),
        _line(LOAN_INTEREST_INCOME, "Pendapatan bunga pinjaman", credit=data["interest_amount"]),
    ]

def _service_fee_payment(data: Dict[str, Any]) -> Tuple[str, List[JournalLine]]:
    lines = [
        _line(SERVICE_FEE_EXPENSE, "Beban jasa pelayanan anggota", debit=data["gross_amount"]),
        _line(CASH, "Pembayaran jasa pelayanan tunai", credit=data["net_amount"]),
    ]
    loan_deduction = data.get("loan_deduction", 0) or 0
    if loan_deduction > 0:
        lines.append(_line(LOAN_RECEIVABLE, "Pemotongan angsuran dari jasa pelayanan", credit=loan_deduction))
    return f"Pembayaran Jasa Pelayanan {data['period']} - {data['member_id']}", lines

TEMPLATES: Dict[str, Tuple[Callable[[Dict[str, Any]], Tuple[str, List[JournalLine]]], ActivityClassification]] = {
    "savings_deposit": (_savings_deposit, ActivityClassification.OPERATING),
    "savings_withdrawal": (_savings_withdrawal, ActivityClassification.OPERATING),
    "loan_disbursement": (_loan_disbursement, ActivityClassification.FINANCING),
    "loan_payment": (_loan_payment, ActivityClassification.FINANCING),
    "service_fee_payment": (_service_fee_payment, ActivityClassification.OPERATING),
}

def build_journal_entry(transaction_type: str, data: Dict[str, Any]) -> JournalEntry:
    """Build the posted journal entry for one koperasi transaction."""
    if transaction_type not in TEMPLATES:
        raise UnsupportedTransactionType(f"Invalid transaction_type: {transaction_type}")
    build_lines, classification = TEMPLATES[transaction_type]
    description, lines = build_lines(data)

    journal_id = f"JE-{uuid.uuid4().hex[:8]}"
    entry_date = data.get("transaction_date") or date.today()
    if isinstance(entry_date, str):
        entry_date = date.fromisoformat(entry_date)

    return JournalEntry(
        journal_id=journal_id,
        entry_date=entry_date,
        reference_type=transaction_type,
        reference_id=data.get("reference_id") or data.get("transaction_id") or journal_id,
        description=description,
        lines=lines,
        total_debit=sum((l.debit_amount for l in lines), Decimal(0)),
        total_credit=sum((l.credit_amount for l in lines), Decimal(0)),
        status=EntryStatus.POSTED,
        activity_classification=classification
    )
