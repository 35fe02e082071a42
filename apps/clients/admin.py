from django.contrib import admin

from apps.clients.models import Client, Goal


class GoalInline(admin.TabularInline):
    model = Goal
    extra = 0


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'full_name', 'email', 'mobile', 'age',
        'retirement_age', 'life_expectancy', 'monthly_income',
        'monthly_expenses', 'created_at',
    )
    list_filter = ('age', 'created_at')
    search_fields = ('full_name', 'email', 'mobile')
    readonly_fields = ('password', 'created_at', 'updated_at')
    inlines = (GoalInline,)
