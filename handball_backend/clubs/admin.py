# clubs/admin.py
from django.contrib import admin
from .models import Club

@admin.register(Club)
class ClubAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)
