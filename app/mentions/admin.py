"""
Django admin configuration for mentions.
"""

from django.contrib import admin

from mentions.models import ChatMention, UserMention


@admin.register(UserMention)
class UserMentionAdmin(admin.ModelAdmin):
    list_display = ["shortname", "user", "created_at"]
    search_fields = ["shortname", "user__email"]
    raw_id_fields = ["user"]


@admin.register(ChatMention)
class ChatMentionAdmin(admin.ModelAdmin):
    list_display = ["shortname", "chat", "created_at"]
    search_fields = ["shortname"]
    raw_id_fields = ["chat"]
