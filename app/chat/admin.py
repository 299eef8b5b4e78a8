"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Chat management, deleted chats included
- Member viewing
- Message moderation
"""

from django.contrib import admin

from chat.models import Chat, ChatMember, Message


class ChatMemberInline(admin.TabularInline):
    model = ChatMember
    extra = 0
    readonly_fields = ["created_at"]
    raw_id_fields = ["user"]


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    list_display = ["id", "type", "name", "is_private", "is_deleted", "created_at"]
    list_filter = ["type", "is_private", "is_deleted"]
    search_fields = ["name", "id"]
    readonly_fields = ["pair_key", "created_at", "updated_at", "deleted_at"]
    inlines = [ChatMemberInline]
    ordering = ["-created_at"]

    def get_queryset(self, request):
        return Chat.all_objects.all()


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "chat", "sender", "is_deleted", "edited_at", "created_at"]
    list_filter = ["is_deleted"]
    search_fields = ["text", "sender__email"]
    raw_id_fields = ["chat", "sender"]
    readonly_fields = ["created_at", "updated_at", "edited_at", "deleted_at"]

    def get_queryset(self, request):
        return Message.all_objects.select_related("chat", "sender")
