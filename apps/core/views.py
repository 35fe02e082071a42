"""
Core views for the onboarding backend.
"""

import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.serializers import (
    CalculateEMISerializer,
    EMIResponseSerializer,
    ValidateFieldResponseSerializer,
    ValidateFieldSerializer,
)
from apps.core.utils import calculate_monthly_emi, round_emi_for_display
from apps.core.validators import validate_field

logger = logging.getLogger(__name__)


def health_check(request):
    """
    GET /health/

    Simple health check endpoint for Docker and load balancer probes.
    """
    return JsonResponse({'status': 'healthy'}, status=200)


class CalculateEMIView(APIView):
    """
    POST /api/calculate-emi

    Compute the monthly installment of an existing loan, rounded to the
    nearest rupee.
    """

    def post(self, request):
        """Handle EMI calculation."""
        serializer = CalculateEMISerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        emi = calculate_monthly_emi(
            data['loan_amount'],
            data['tenure_years'],
            data['annual_interest_rate_pct'],
        )
        if emi is None:
            logger.debug("EMI undefined for %s", dict(data))

        response_serializer = EMIResponseSerializer({
            **data,
            'monthly_emi': round_emi_for_display(emi),
        })

        return Response(response_serializer.data, status=status.HTTP_200_OK)


class ValidateFieldView(APIView):
    """
    POST /api/validate-field

    Validate one wizard field against the supplied context. Always 200:
    an invalid value is a normal result, not a request error.
    """

    def post(self, request):
        """Handle single-field validation."""
        serializer = ValidateFieldSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = validate_field(data['field'], data['value'], data['context'])

        response_serializer = ValidateFieldResponseSerializer({
            'field': data['field'],
            'valid': result.is_valid,
            'message': result.message,
        })

        return Response(response_serializer.data, status=status.HTTP_200_OK)
