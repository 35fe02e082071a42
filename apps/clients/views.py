"""
Client views for the onboarding backend.

Views are thin — all business logic is in the service layer.
Every PUT replaces one whole section of the client record.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.clients.serializers import (
    ClientDetailsSerializer,
    ClientProfileSerializer,
    ClientSummarySerializer,
    LoginSerializer,
    RegisterClientSerializer,
    RiskAssessmentSerializer,
    UpdateGoalsSerializer,
    UpdateInvestmentSerializer,
    UpdatePlanSerializer,
)
from apps.clients.services import ClientService

logger = logging.getLogger(__name__)


def _summary(client):
    return ClientSummarySerializer({
        'id': client.pk,
        'full_name': client.full_name,
        'email': client.email,
        'mobile': client.mobile,
        'age': client.age,
    }).data


class RegisterClientView(APIView):
    """
    POST /api/register

    Register a new client in the system.
    """

    def post(self, request):
        """Handle client registration."""
        serializer = RegisterClientSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        client = ClientService.register(serializer.validated_data)

        return Response(
            {
                'message': 'User registered successfully',
                'user': _summary(client),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST /api/login

    Verify a client's email and password.
    """

    def post(self, request):
        """Handle login."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        client = ClientService.authenticate(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )

        return Response(
            {
                'message': 'Login successful',
                'user': _summary(client),
            },
            status=status.HTTP_200_OK,
        )


class ClientProfileView(APIView):
    """
    GET /api/users/<user_id>

    View the accumulated onboarding profile of a client.
    """

    def get(self, request, user_id):
        """Handle viewing a client profile."""
        client = ClientService.get_client(user_id)
        return Response(
            ClientProfileSerializer(client).data,
            status=status.HTTP_200_OK,
        )


class SectionUpdateView(APIView):
    """
    Base view for PUT /api/users/<user_id>/<section>.

    Subclasses name the request serializer, the service method that
    persists the section and the confirmation message.
    """

    serializer_class = None
    message = ''

    def get_serializer_context(self, user_id):
        return {}

    def perform_update(self, user_id, validated_data):
        raise NotImplementedError

    def put(self, request, user_id):
        """Validate and replace the section."""
        serializer = self.serializer_class(
            data=request.data,
            context=self.get_serializer_context(user_id),
        )
        serializer.is_valid(raise_exception=True)

        client = self.perform_update(user_id, serializer.validated_data)

        return Response(
            {
                'message': self.message,
                'user': ClientProfileSerializer(client).data,
            },
            status=status.HTTP_200_OK,
        )


class ClientDetailsView(SectionUpdateView):
    """PUT /api/users/<user_id>/client-details"""

    serializer_class = ClientDetailsSerializer
    message = 'Client details updated'

    def get_serializer_context(self, user_id):
        return {'client': ClientService.get_client(user_id)}

    def perform_update(self, user_id, validated_data):
        return ClientService.update_client_details(user_id, validated_data)


class RiskAssessmentView(SectionUpdateView):
    """PUT /api/users/<user_id>/risk-assessment"""

    serializer_class = RiskAssessmentSerializer
    message = 'Risk assessment updated'

    def perform_update(self, user_id, validated_data):
        return ClientService.update_risk_assessment(user_id, validated_data)


class GoalsView(SectionUpdateView):
    """PUT /api/users/<user_id>/goals"""

    serializer_class = UpdateGoalsSerializer
    message = 'Goals updated'

    def perform_update(self, user_id, validated_data):
        return ClientService.update_goals(user_id, validated_data['goals'])


class PlanView(SectionUpdateView):
    """PUT /api/users/<user_id>/plan"""

    serializer_class = UpdatePlanSerializer
    message = 'Plan updated'

    def perform_update(self, user_id, validated_data):
        return ClientService.update_plan(user_id, validated_data['plan'])


class InvestmentView(SectionUpdateView):
    """PUT /api/users/<user_id>/investment"""

    serializer_class = UpdateInvestmentSerializer
    message = 'Investment details updated'

    def perform_update(self, user_id, validated_data):
        return ClientService.update_investment(user_id, validated_data['investment'])
