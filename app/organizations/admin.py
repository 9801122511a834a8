"""
Django admin configuration for organization models.
"""

from django.contrib import admin

from organizations.models import OpportunityMentor, OrganizationProfile


@admin.register(OrganizationProfile)
class OrganizationProfileAdmin(admin.ModelAdmin):
    list_display = ("title", "type", "state", "area", "contact_email", "created_at")
    list_filter = ("type", "state")
    search_fields = ("title", "contact_email", "abn")
    readonly_fields = ("created_at", "updated_at")


@admin.register(OpportunityMentor)
class OpportunityMentorAdmin(admin.ModelAdmin):
    """
    Mentor assignments.

    Non-volunteers are rejected by OpportunityMentor.clean(), and duplicate
    (opportunity, volunteer) pairs by the unique constraint; both surface
    as form errors.
    """

    list_display = ("volunteer", "opportunity_id", "organization_profile", "assigned_by", "assigned_at")
    list_filter = ("organization_profile",)
    search_fields = ("volunteer__email", "volunteer__name", "opportunity_id")
    raw_id_fields = ("volunteer", "organization_profile", "assigned_by")
    readonly_fields = ("created_at", "updated_at")
