"""
Core app URL configuration for calculation and validation endpoints.
"""

from django.urls import path

from apps.core.views import CalculateEMIView, ValidateFieldView

urlpatterns = [
    path('calculate-emi', CalculateEMIView.as_view(), name='calculate-emi'),
    path('validate-field', ValidateFieldView.as_view(), name='validate-field'),
]
