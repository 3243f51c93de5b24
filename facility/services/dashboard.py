from __future__ import annotations

from django.utils import timezone

from facility.models import DailyRecord, Resident
from facility.services.ledger import month_totals


def dashboard_stats(*, include_finance: bool) -> dict:
    today = timezone.localdate()
    stats = {
        'active_residents': Resident.objects.filter(status='Aktif').count(),
        'today_records': DailyRecord.objects.filter(record_datetime__date=today).count(),
    }
    if include_finance:
        income, expense = month_totals(today)
        stats['monthly_income'] = income
        stats['monthly_expense'] = expense
    return stats
