"""
Donation and expense ledger.

Income and expense transactions get independent code sequences
(``INC-001``, ``EXP-001``) chosen from their category's direction.
"""
from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Q, Sum
from django.db.models.functions import ExtractMonth
from django.utils import timezone

from facility.exceptions import NotFoundError, ValidationError
from facility.models import DonationCategory, Transaction
from facility.services.audit import log_action
from facility.services.identifiers import create_with_code
from facility.services.uploads import StagedUploads, remove_upload

logger = logging.getLogger(__name__)

PREFIXES = {'income': 'INC', 'expense': 'EXP'}
OPTIONAL_FIELDS = ('source', 'description', 'payment_method', 'reference_number', 'notes')


def create_transaction(*, category_id: int, amount: Decimal, transaction_date: dt.date, attachment=None,
                       user=None, **extra) -> Transaction:
    category = DonationCategory.objects.filter(pk=category_id).first()
    if category is None:
        raise NotFoundError("Category not found", field='category_id')
    if amount < 0:
        raise ValidationError("amount cannot be negative", field='amount')
    prefix = PREFIXES[category.type]

    with StagedUploads() as staged:
        attachment_name = staged.save('transactions', attachment, label='proof', field='attachment')
        with transaction.atomic():
            def build(code: str) -> Transaction:
                return Transaction(
                    transaction_id=code, category=category, amount=amount, transaction_date=transaction_date,
                    attachment=attachment_name,
                    **{k: v for k, v in extra.items() if k in OPTIONAL_FIELDS and v is not None},
                )

            txn = create_with_code(Transaction, field='transaction_id', prefix=prefix, build=build)
            log_action(user=user, action='transaction_create', object_type='transaction', object_id=txn.id,
                       detail={'transaction_id': txn.transaction_id, 'amount': str(amount)})

    logger.info("Transaction %s recorded (%s %s)", txn.transaction_id, category.type, amount)
    return txn


def delete_transaction(pk: int, *, user=None) -> None:
    """Delete the row, then its attachment.  A missing file is fine."""
    with transaction.atomic():
        txn = Transaction.objects.select_for_update().filter(pk=pk).first()
        if txn is None:
            raise NotFoundError("Transaction not found")
        attachment = txn.attachment.name
        code = txn.transaction_id
        txn.delete()
        log_action(user=user, action='transaction_delete', object_type='transaction', object_id=pk,
                   detail={'transaction_id': code})
    # Only touch the file once the row is gone for good
    remove_upload(attachment)
    logger.info("Transaction %s deleted", code)


def _parse_month(month: str) -> tuple[int, int]:
    try:
        year, mon = (int(part) for part in month.split('-'))
        dt.date(year, mon, 1)
    except ValueError:
        raise ValidationError("month must be YYYY-MM", field='month') from None
    return year, mon


def list_transactions(*, type: str | None = None, month: str | None = None,
                      category_id: int | None = None) -> list[Transaction]:
    qs = Transaction.objects.select_related('category')
    if type:
        qs = qs.filter(category__type=type)
    if month:
        year, mon = _parse_month(month)
        qs = qs.filter(transaction_date__year=year, transaction_date__month=mon)
    if category_id:
        qs = qs.filter(category_id=category_id)
    return list(qs.order_by('-transaction_date', '-id'))


def _totals(qs) -> tuple[Decimal, Decimal]:
    agg = qs.aggregate(
        income=Sum('amount', filter=Q(category__type='income')),
        expense=Sum('amount', filter=Q(category__type='expense')),
    )
    return agg['income'] or Decimal('0'), agg['expense'] or Decimal('0')


def financial_summary(year: int | None = None) -> dict:
    year = year or timezone.localdate().year
    qs = Transaction.objects.filter(transaction_date__year=year)
    income, expense = _totals(qs)
    monthly = (
        qs.annotate(month=ExtractMonth('transaction_date'))
        .values('month')
        .annotate(
            income=Sum('amount', filter=Q(category__type='income')),
            expense=Sum('amount', filter=Q(category__type='expense')),
        )
        .order_by('-month')
    )
    return {
        'total_income': income,
        'total_expense': expense,
        'balance': income - expense,
        'monthly_breakdown': [
            {
                'month': f"{year}-{row['month']:02d}",
                'income': row['income'] or Decimal('0'),
                'expense': row['expense'] or Decimal('0'),
            }
            for row in monthly
        ],
        'current_year': year,
    }


def month_totals(today: dt.date | None = None) -> tuple[Decimal, Decimal]:
    today = today or timezone.localdate()
    return _totals(Transaction.objects.filter(transaction_date__year=today.year, transaction_date__month=today.month))
