from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from facility.permissions import can_access, resource_permission
from facility.services import reference
from facility.services.dashboard import dashboard_stats as compute_stats


@api_view(['GET'])
@permission_classes([resource_permission('reference')])
def activity_types(request):
    return Response({'ok': True, 'data': reference.activity_types()})


@api_view(['GET'])
@permission_classes([resource_permission('reference')])
def donation_categories(request):
    return Response({'ok': True, 'data': reference.donation_categories()})


@api_view(['GET'])
@permission_classes([resource_permission('dashboard')])
def dashboard_stats(request):
    # financial figures follow the transactions policy
    finance = can_access(request.user.role, 'transactions', 'read')
    return Response({'ok': True, 'data': compute_stats(include_finance=finance)})
