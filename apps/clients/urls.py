"""
Client URL configuration.
"""

from django.urls import path

from apps.clients.views import (
    ClientDetailsView,
    ClientProfileView,
    GoalsView,
    InvestmentView,
    LoginView,
    PlanView,
    RegisterClientView,
    RiskAssessmentView,
)

urlpatterns = [
    path('register', RegisterClientView.as_view(), name='register'),
    path('login', LoginView.as_view(), name='login'),
    path('users/<int:user_id>', ClientProfileView.as_view(), name='client-profile'),
    path(
        'users/<int:user_id>/client-details',
        ClientDetailsView.as_view(),
        name='client-details',
    ),
    path(
        'users/<int:user_id>/risk-assessment',
        RiskAssessmentView.as_view(),
        name='risk-assessment',
    ),
    path('users/<int:user_id>/goals', GoalsView.as_view(), name='goals'),
    path('users/<int:user_id>/plan', PlanView.as_view(), name='plan'),
    path('users/<int:user_id>/investment', InvestmentView.as_view(), name='investment'),
]
