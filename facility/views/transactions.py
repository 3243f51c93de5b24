"""Donation/expense ledger endpoints (admin only)."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.exceptions import ValidationError
from facility.models import Transaction
from facility.permissions import resource_permission
from facility.serializers.ledger import TransactionCreateSerializer, TransactionFilterSerializer
from facility.services import ledger

from .common import iso, query_params, upload_url


def _serialize(t: Transaction) -> dict:
    return {
        'id': t.id,
        'transaction_id': t.transaction_id,
        'category_id': t.category_id,
        'category_name': t.category.name,
        'category_type': t.category.type,
        'amount': t.amount,
        'transaction_date': iso(t.transaction_date),
        'source': t.source,
        'description': t.description,
        'payment_method': t.payment_method,
        'reference_number': t.reference_number,
        'notes': t.notes,
        'attachment_path': t.attachment.name or None,
        'attachment_url': upload_url(t.attachment),
        'created_at': iso(t.created_at),
    }


@api_view(['GET', 'POST'])
@permission_classes([resource_permission('transactions')])
def transactions_list(request):
    if request.method == 'GET':
        filters = query_params(request, TransactionFilterSerializer)
        rows = ledger.list_transactions(**filters)
        return Response({'ok': True, 'data': [_serialize(t) for t in rows]})

    s = TransactionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    txn = ledger.create_transaction(user=request.user, **s.validated_data)
    return Response({
        'ok': True,
        'message': 'Transaction recorded',
        'id': txn.id,
        'transaction_id': txn.transaction_id,
        'attachment_path': txn.attachment.name or None,
    }, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([resource_permission('transactions')])
def transaction_detail(request, pk: int):
    ledger.delete_transaction(pk, user=request.user)
    return Response({'ok': True, 'message': 'Transaction deleted'})


@api_view(['GET'])
@permission_classes([resource_permission('transactions')])
def financial_summary(request):
    year = request.query_params.get('year')
    if year and not year.isdigit():
        raise ValidationError('year must be a number', field='year')
    return Response({'ok': True, 'data': ledger.financial_summary(int(year) if year else None)})
